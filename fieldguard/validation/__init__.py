from fieldguard.validation.base import UniquenessChecker
from fieldguard.validation.categories import DEFAULT_CATEGORIES, CategoryTable, FileCategory
from fieldguard.validation.messages import DEFAULT_MESSAGES, ErrorMessageTable
from fieldguard.validation.models import FileRecord, UploadError
from fieldguard.validation.validator import Validator

__all__ = [
    "DEFAULT_CATEGORIES",
    "DEFAULT_MESSAGES",
    "CategoryTable",
    "ErrorMessageTable",
    "FileCategory",
    "FileRecord",
    "UniquenessChecker",
    "UploadError",
    "Validator",
]
