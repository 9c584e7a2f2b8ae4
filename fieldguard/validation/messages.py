"""Default error messages and the per-validator message table.

Templates are rendered with ``str.format``. Available fields depend on the
rule: ``{field}`` is always passed, length rules add ``{limit}``, type rules
add ``{types}``, size rules add ``{size}``.
"""

from collections.abc import Mapping
from types import MappingProxyType

from fieldguard.validation.exceptions import ConfigurationError

DEFAULT_MESSAGES: Mapping[str, str] = MappingProxyType(
    {
        "required": "This field is required",
        "text": "Only letters are allowed",
        "number": "Only numbers are allowed",
        "unique": "This value already exists",
        "email": "Invalid email address",
        "length": "Invalid length",
        "min_length": "{field} must be at least {limit} characters",
        "max_length": "{field} must be no more than {limit} characters",
        "array": "Please select at least one option",
        "similarity": "Values do not match",
        "caps": "Must contain at least one uppercase letter",
        "number_required": "Must contain at least one number",
        "symbol_required": "Must contain at least one symbol",
        "no_numbers": "Numbers are not allowed",
        "no_symbols": "Symbols are not allowed",
        "no_space": "Spaces are not allowed",
        "file_type": "{field} must be one of these types: {types}",
        "file_size": "{field} exceeds maximum size of {size}",
        "file_upload": "File upload error",
        "file_name": "{field} file name does not match required pattern",
        "not_image": "File is not an image",
        "image_unreadable": "Could not determine image dimensions",
        "min_width": "{field} width must be at least {limit} pixels",
        "min_height": "{field} height must be at least {limit} pixels",
        "max_width": "{field} width must be no more than {limit} pixels",
        "max_height": "{field} height must be no more than {limit} pixels",
        "move_failed": "Failed to move uploaded file",
    }
)


class ErrorMessageTable:
    """Error-kind -> message lookup with per-instance overrides."""

    def __init__(self, overrides: Mapping[str, str] | None = None) -> None:
        overrides = dict(overrides or {})
        unknown = sorted(set(overrides) - set(DEFAULT_MESSAGES))
        if unknown:
            raise ConfigurationError(f"Unknown error message kinds: {unknown}")
        self._messages: dict[str, str] = {**DEFAULT_MESSAGES, **overrides}

    def message(self, kind: str, **params: object) -> str:
        """Render the message for ``kind``.

        Raises:
            ConfigurationError: if ``kind`` is not a known error kind, or the
                template references a field that was not supplied.
        """
        template = self._messages.get(kind)
        if template is None:
            raise ConfigurationError(f"Unknown error message kind: {kind}")
        try:
            return template.format(**params)
        except (KeyError, IndexError) as exc:
            raise ConfigurationError(
                f"Message template for '{kind}' references an unknown field: {exc}"
            ) from exc

    def __getitem__(self, kind: str) -> str:
        return self._messages[kind]

    def __contains__(self, kind: object) -> bool:
        return kind in self._messages
