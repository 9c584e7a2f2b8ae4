"""Per-field validation chain over one request's input.

Usage::

    validator = Validator(data, checker=UniquenessRepository())
    validator.begin_field("email").required().is_email().is_unique("users").store()
    validator.begin_field("password").required().min_length(8).has_caps().store()
    validator.begin_field("password_confirm").similar_to("password")
    validator.begin_file(data["avatar"], "avatar").allowed_for("images").max_file_size(
        "images"
    ).move_to("/srv/uploads")

    if not validator.is_valid():
        return render(errors=validator.errors)
    save(validator.clean_data())

Each rule is a no-op once the current field has an error, so only the first
failure per field is recorded. Misuse and backend faults raise exceptions from
``fieldguard.validation.exceptions``; bad input never raises.

A validator holds mutable run state and must not be shared between requests.
"""

import os
import re
from collections.abc import Iterable, Mapping
from typing import Any

from email_validator import EmailNotValidError, validate_email

from fieldguard.logging.logger import Log
from fieldguard.validation.base import UniquenessChecker
from fieldguard.validation.categories import CategoryTable
from fieldguard.validation.exceptions import (
    ConfigurationError,
    FileChainError,
    FileMoveError,
    ImageDimensionsError,
    StorageError,
    UnknownFieldError,
)
from fieldguard.validation.file_descriptor import FileDescriptor
from fieldguard.validation.formatting import escape_html, format_bytes
from fieldguard.validation.messages import ErrorMessageTable
from fieldguard.validation.models import MISSING, FileRecord, InputRecord

_NUMERIC_RE = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*")
_ALPHA_RE = re.compile(r"[A-Za-z]+")
_CAPS_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
_SYMBOL_RE = re.compile(r"\W")

_CONTAINER_TYPES = (list, tuple, set, frozenset, dict)


class Validator:
    """Chainable rules over one validation run."""

    def __init__(
        self,
        data: Mapping[str, Any],
        checker: UniquenessChecker | None = None,
        messages: ErrorMessageTable | None = None,
        categories: CategoryTable | None = None,
    ) -> None:
        self._input = InputRecord(data)
        self._checker = checker
        self._messages = messages or ErrorMessageTable()
        self._categories = categories or CategoryTable()
        self._errors: dict[str, str] = {}
        self._cleaned: dict[str, Any] = {}
        self._name = ""
        self._value: Any = None
        self._file: FileDescriptor | None = None

    # ------------------------------------------------------------------
    # Cursor, results and storage
    # ------------------------------------------------------------------

    def begin_field(self, name: str) -> "Validator":
        """Point the cursor at input field ``name``.

        Raises:
            UnknownFieldError: if the input has no field called ``name``.
        """
        if self._input.lookup(name) is MISSING:
            raise UnknownFieldError(f'Field "{name}" does not exist in the input')
        self._name = name
        self._value = self._input.value(name)
        self._file = None
        return self

    def is_valid(self) -> bool:
        return not self._errors

    def check_error(self) -> bool:
        """True if the current field already has an error."""
        return self._name in self._errors

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    def error_for(self, name: str) -> str | None:
        return self._errors.get(name)

    def clean_data(self) -> dict[str, Any]:
        return dict(self._cleaned)

    def get(self, name: str) -> Any:
        """Cleaned value of ``name``, or "" if it was never stored."""
        return self._cleaned.get(name, "")

    def store(self) -> "Validator":
        """Store the raw current value as cleaned data.

        This does not consult ``check_error()``: storing a field that failed
        leaves it in both maps. Callers decide whether to store.
        """
        self._cleaned[self._name] = self._value
        return self

    def store_safe(self) -> "Validator":
        """Like ``store()``, but HTML-escapes string values first."""
        self._cleaned[self._name] = escape_html(self._value)
        return self

    def _fail(self, kind: str, error: str | None, **params: object) -> None:
        message = error or self._messages.message(kind, field=self._name, **params)
        self._errors[self._name] = message
        Log.debug("Validation rule failed", field=self._name, rule=kind)

    def _text(self) -> str:
        value = self._value
        if isinstance(value, str):
            return value
        if value is None or isinstance(value, _CONTAINER_TYPES):
            return ""
        return str(value)

    # ------------------------------------------------------------------
    # Presence, length and comparison
    # ------------------------------------------------------------------

    def required(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        value = self._value
        if isinstance(value, str):
            empty = not value.strip()
        elif isinstance(value, _CONTAINER_TYPES):
            empty = not value
        else:
            empty = value is None
        if empty:
            self._fail("required", error)
        return self

    def _length(self) -> int:
        if isinstance(self._value, (str, *_CONTAINER_TYPES)):
            return len(self._value)
        return len(self._text())

    def max_length(self, limit: int, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if self._length() > limit:
            self._fail("max_length", error, limit=limit)
        return self

    def min_length(self, limit: int, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if self._length() < limit:
            self._fail("min_length", error, limit=limit)
        return self

    def similar_to(self, other: str, error: str | None = None) -> "Validator":
        """Current value must equal field ``other``.

        Skipped when ``other`` already failed or is absent, so a mismatch is
        never reported on top of the other field's own error.
        """
        if self.check_error():
            return self
        if other in self._errors or other not in self._input:
            return self
        if self._value != self._input.value(other):
            self._fail("similarity", error)
        return self

    # ------------------------------------------------------------------
    # Types
    # ------------------------------------------------------------------

    def is_email(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        valid = isinstance(self._value, str)
        if valid:
            try:
                validate_email(self._value, check_deliverability=False)
            except EmailNotValidError:
                valid = False
        if not valid:
            self._fail("email", error)
        return self

    def is_numeric(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        value = self._value
        if isinstance(value, bool):
            numeric = False
        elif isinstance(value, (int, float)):
            numeric = True
        else:
            numeric = isinstance(value, str) and _NUMERIC_RE.fullmatch(value) is not None
        if not numeric:
            self._fail("number", error)
        return self

    def is_array(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if not isinstance(self._value, _CONTAINER_TYPES):
            self._fail("array", error)
        return self

    # ------------------------------------------------------------------
    # Character classes
    # ------------------------------------------------------------------

    def is_alpha(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if not _ALPHA_RE.fullmatch(self._text()):
            self._fail("text", error)
        return self

    def has_caps(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if not _CAPS_RE.search(self._text()):
            self._fail("caps", error)
        return self

    def has_numbers(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if not _DIGIT_RE.search(self._text()):
            self._fail("number_required", error)
        return self

    def has_symbols(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if not _SYMBOL_RE.search(self._text()):
            self._fail("symbol_required", error)
        return self

    def no_numbers(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if _DIGIT_RE.search(self._text()):
            self._fail("no_numbers", error)
        return self

    def no_symbols(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if _SYMBOL_RE.search(self._text()):
            self._fail("no_symbols", error)
        return self

    def no_space(self, error: str | None = None) -> "Validator":
        if self.check_error():
            return self
        if " " in self._text():
            self._fail("no_space", error)
        return self

    # ------------------------------------------------------------------
    # Storage-backed
    # ------------------------------------------------------------------

    def is_unique(
        self,
        table: str,
        column: str | None = None,
        error: str | None = None,
    ) -> "Validator":
        """Fail if ``table`` already holds the current value.

        Raises:
            ConfigurationError: if the validator has no uniqueness checker.
            StorageError: if the checker fails; the run cannot continue.
        """
        if self.check_error():
            return self
        if self._checker is None:
            raise ConfigurationError("is_unique requires a uniqueness checker")
        column = column or self._name
        Log.debug("Checking uniqueness", field=self._name, table=table, column=column)
        try:
            exists = self._checker.exists(table, column, self._value)
        except StorageError:
            Log.error("Uniqueness check failed", table=table, column=column)
            raise
        except Exception as exc:
            Log.error(f"Uniqueness check failed: {exc}", table=table, column=column)
            raise StorageError(f"Uniqueness check failed: {exc}") from exc
        if exists:
            self._fail("unique", error)
        return self

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def begin_file(self, record: FileRecord | Mapping[str, Any], name: str) -> "Validator":
        """Start validating an uploaded file under field ``name``.

        An upload error reported by the transport is recorded immediately and
        turns every later file rule for this field into a no-op.
        """
        if not isinstance(record, FileRecord):
            record = FileRecord.from_mapping(record)
        self._file = FileDescriptor(record)
        self._name = name
        self._value = record
        if self._file.has_error() and not self.check_error():
            message = self._file.error_message()
            if message is None:
                self._fail("file_upload", None)
            else:
                self._errors[name] = message
                Log.debug(f"Upload failed: {message}", field=name, rule="file_upload")
        return self

    def _active_file(self) -> FileDescriptor:
        if self._file is None:
            raise FileChainError(
                f"File rule called for '{self._name}' without begin_file()"
            )
        return self._file

    def allowed_for(self, category: str, error: str | None = None) -> "Validator":
        """Extension and sniffed MIME type must fit ``category``.

        Raises:
            UnknownCategoryError: if ``category`` is not configured.
        """
        file = self._active_file()
        allowed = self._categories.get(category)
        if self.check_error():
            return self
        if not file.is_type_allowed(allowed.extensions, allowed.mime_types):
            self._fail("file_type", error, types=", ".join(sorted(allowed.extensions)))
        return self

    def allowed_types(
        self,
        extensions: Iterable[str],
        mime_types: Iterable[str] = (),
        error: str | None = None,
    ) -> "Validator":
        file = self._active_file()
        if self.check_error():
            return self
        extensions = list(extensions)
        if not file.is_type_allowed(extensions, mime_types):
            self._fail("file_type", error, types=", ".join(extensions))
        return self

    def max_file_size(self, size: int | str, error: str | None = None) -> "Validator":
        """File must not be larger than ``size`` bytes or a category's ceiling.

        Raises:
            UnknownCategoryError: if ``size`` names an unknown category.
        """
        file = self._active_file()
        if isinstance(size, str):
            limit = self._categories.get(size).max_size_bytes
        else:
            limit = size
        if self.check_error():
            return self
        if file.is_size_exceeded(limit):
            self._fail("file_size", error, size=format_bytes(limit))
        return self

    def image_dimensions(
        self,
        min_width: int | None = None,
        min_height: int | None = None,
        max_width: int | None = None,
        max_height: int | None = None,
        error: str | None = None,
    ) -> "Validator":
        file = self._active_file()
        if self.check_error():
            return self
        try:
            width, height = file.image_dimensions()
        except ImageDimensionsError as exc:
            self._fail(exc.kind, error)
            return self

        if min_width is not None and width < min_width:
            self._fail("min_width", error, limit=min_width)
        elif min_height is not None and height < min_height:
            self._fail("min_height", error, limit=min_height)
        elif max_width is not None and width > max_width:
            self._fail("max_width", error, limit=max_width)
        elif max_height is not None and height > max_height:
            self._fail("max_height", error, limit=max_height)
        return self

    def file_name_pattern(
        self,
        pattern: str | re.Pattern[str],
        error: str | None = None,
    ) -> "Validator":
        file = self._active_file()
        if self.check_error():
            return self
        if not re.search(pattern, file.name):
            self._fail("file_name", error)
        return self

    def move_to(
        self,
        destination: str | os.PathLike[str],
        new_name: str | None = None,
        error: str | None = None,
    ) -> "Validator":
        """Move the file into ``destination`` and store the resulting path.

        Raises:
            DestinationError: if ``destination`` is not an existing writable
                directory. A failure of the move itself is recorded as a field
                error instead.
        """
        file = self._active_file()
        if self.check_error():
            return self
        try:
            target = file.move(destination, new_name)
        except FileMoveError as exc:
            Log.warning(str(exc), field=self._name, rule="move_failed")
            self._fail("move_failed", error)
            return self
        self._cleaned[self._name] = str(target)
        return self
