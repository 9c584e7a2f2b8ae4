from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from fieldguard.validation.exceptions import UnknownCategoryError

_MB = 1024 * 1024


@dataclass(frozen=True)
class FileCategory:
    """Allowed extensions, sniffed MIME types and size ceiling for a file kind.

    An empty ``mime_types`` set disables the MIME check for the category.
    """

    extensions: frozenset[str]
    mime_types: frozenset[str] = field(default_factory=frozenset)
    max_size_bytes: int = 2 * _MB

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "extensions", frozenset(ext.lower().lstrip(".") for ext in self.extensions)
        )
        object.__setattr__(self, "mime_types", frozenset(self.mime_types))
        if self.max_size_bytes < 0:
            raise ValueError("max_size_bytes must not be negative")


DEFAULT_CATEGORIES: Mapping[str, FileCategory] = MappingProxyType(
    {
        "images": FileCategory(
            extensions=frozenset({"png", "gif", "jpg", "jpeg", "webp"}),
            mime_types=frozenset({"image/png", "image/gif", "image/jpeg", "image/webp"}),
            max_size_bytes=2 * _MB,
        ),
        "documents": FileCategory(
            extensions=frozenset({"pdf", "doc", "docx", "txt"}),
            mime_types=frozenset(
                {
                    "application/pdf",
                    "application/msword",
                    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                    "text/plain",
                }
            ),
            max_size_bytes=5 * _MB,
        ),
        "archives": FileCategory(
            extensions=frozenset({"zip", "rar"}),
            mime_types=frozenset({"application/zip", "application/x-rar-compressed"}),
            max_size_bytes=10 * _MB,
        ),
    }
)


class CategoryTable:
    """Category name -> FileCategory, defaults merged with caller overrides."""

    def __init__(self, overrides: Mapping[str, FileCategory] | None = None) -> None:
        self._categories: dict[str, FileCategory] = {**DEFAULT_CATEGORIES, **(overrides or {})}

    def get(self, name: str) -> FileCategory:
        """Return the category named ``name``.

        Raises:
            UnknownCategoryError: if no such category is configured.
        """
        category = self._categories.get(name)
        if category is None:
            raise UnknownCategoryError(
                f"Invalid file category '{name}'. Choose from: {sorted(self._categories)}"
            )
        return category

    def __contains__(self, name: object) -> bool:
        return name in self._categories

    def names(self) -> list[str]:
        return sorted(self._categories)
