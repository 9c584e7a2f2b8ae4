from collections.abc import Mapping
from typing import Any

from fieldguard.config.settings import Settings
from fieldguard.database.repositories.uniqueness_repository import UniquenessRepository
from fieldguard.logging.logger import Log
from fieldguard.validation.base import UniquenessChecker
from fieldguard.validation.categories import CategoryTable
from fieldguard.validation.messages import ErrorMessageTable
from fieldguard.validation.validator import Validator


class ValidatorFactory:
    """Creates validators wired with the configured messages, categories and checker."""

    @classmethod
    def create(
        cls,
        settings: Settings,
        data: Mapping[str, Any],
        checker: UniquenessChecker | None = None,
    ) -> Validator:
        """Build a validator for one run over ``data``.

        Without an explicit ``checker`` the pooled ``UniquenessRepository`` is
        used, so ``init_pool()`` must have been called before ``is_unique``.
        """
        Log.configure(settings.log_level, settings.app_env)
        return Validator(
            data,
            checker=checker if checker is not None else UniquenessRepository(),
            messages=ErrorMessageTable(settings.error_messages),
            categories=CategoryTable(settings.file_categories),
        )
