from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Any, Final


class UploadError(IntEnum):
    """Upload status codes reported by the transport layer."""

    OK = 0
    INI_SIZE = 1
    FORM_SIZE = 2
    PARTIAL = 3
    NO_FILE = 4
    NO_TMP_DIR = 6
    CANT_WRITE = 7
    EXTENSION = 8


@dataclass(frozen=True)
class FileRecord:
    """Metadata of one uploaded file as handed over by the transport layer."""

    name: str
    temp_location: str
    declared_type: str = ""
    upload_error_code: int = UploadError.OK
    size_bytes: int = 0

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "FileRecord":
        return cls(
            name=str(raw.get("name") or ""),
            temp_location=str(raw.get("temp_location") or ""),
            declared_type=str(raw.get("declared_type") or ""),
            upload_error_code=int(raw.get("upload_error_code", UploadError.OK)),
            size_bytes=int(raw.get("size_bytes", 0)),
        )


@dataclass(frozen=True)
class ScalarField:
    """A text or scalar input value (containers of scalars included)."""

    value: Any


@dataclass(frozen=True)
class FileField:
    """An uploaded-file input value."""

    record: FileRecord


class _Missing:
    """Marker for a field absent from the input."""

    _instance: "_Missing | None" = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()

FieldValue = ScalarField | FileField | _Missing


def _is_file_mapping(value: object) -> bool:
    return isinstance(value, Mapping) and "name" in value and "temp_location" in value


class InputRecord:
    """Immutable snapshot of all fields available to one validation run.

    File fields may be given as ``FileRecord`` instances or as mappings that
    carry at least ``name`` and ``temp_location``; everything else is a
    scalar field.
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        fields: dict[str, ScalarField | FileField] = {}
        for name, value in data.items():
            if isinstance(value, FileRecord):
                fields[name] = FileField(value)
            elif _is_file_mapping(value):
                fields[name] = FileField(FileRecord.from_mapping(value))
            else:
                fields[name] = ScalarField(value)
        self._fields: Mapping[str, ScalarField | FileField] = MappingProxyType(fields)

    def lookup(self, name: str) -> FieldValue:
        return self._fields.get(name, MISSING)

    def value(self, name: str) -> Any:
        """Return the raw value of ``name`` (a FileRecord for file fields)."""
        field = self._fields[name]
        if isinstance(field, FileField):
            return field.record
        return field.value

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __len__(self) -> int:
        return len(self._fields)
