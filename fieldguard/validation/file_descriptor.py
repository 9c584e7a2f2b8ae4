"""Uploaded-file wrapper: upload status, sniffed type, size, dimensions, move.

The client-declared content type is kept on the record for reference only;
every type decision uses the MIME type sniffed from the temp file content.
"""

import os
import shutil
from collections.abc import Iterable
from pathlib import Path

import magic
from PIL import Image, UnidentifiedImageError

from fieldguard.logging.logger import Log
from fieldguard.validation.exceptions import (
    DestinationError,
    FileMoveError,
    ImageDimensionsError,
)
from fieldguard.validation.models import FileRecord, UploadError

UPLOAD_ERROR_MESSAGES: dict[int, str] = {
    UploadError.INI_SIZE: "The uploaded file exceeds the server's maximum upload size",
    UploadError.FORM_SIZE: "The uploaded file exceeds the maximum size allowed by the form",
    UploadError.PARTIAL: "The uploaded file was only partially uploaded",
    UploadError.NO_FILE: "No file was uploaded",
    UploadError.NO_TMP_DIR: "Missing a temporary folder",
    UploadError.CANT_WRITE: "Failed to write file to disk",
    UploadError.EXTENSION: "A server extension stopped the file upload",
}


class FileDescriptor:
    """One uploaded file under validation. Discarded at the end of the run."""

    def __init__(self, record: FileRecord) -> None:
        self._record = record
        self._mime_type: str | None = None
        self._dimensions: tuple[int, int] | None = None
        self.final_path: Path | None = None

    @property
    def name(self) -> str:
        return self._record.name

    @property
    def size_bytes(self) -> int:
        return self._record.size_bytes

    @property
    def temp_location(self) -> Path:
        return Path(self._record.temp_location)

    @property
    def extension(self) -> str:
        return Path(self._record.name).suffix.lstrip(".").lower()

    def has_error(self) -> bool:
        return self._record.upload_error_code != UploadError.OK

    def error_message(self) -> str | None:
        """Describe the upload error, or None for unknown codes."""
        return UPLOAD_ERROR_MESSAGES.get(self._record.upload_error_code)

    @property
    def mime_type(self) -> str:
        """MIME type sniffed from the temp file content; "" if unreadable."""
        if self._mime_type is None:
            try:
                self._mime_type = magic.from_file(str(self.temp_location), mime=True)
            except (OSError, magic.MagicException) as exc:
                Log.warning(f"Could not sniff MIME type: {exc}", path=self.temp_location)
                self._mime_type = ""
        return self._mime_type

    def is_type_allowed(
        self,
        extensions: Iterable[str],
        mime_types: Iterable[str] = (),
    ) -> bool:
        allowed_extensions = {ext.lower().lstrip(".") for ext in extensions}
        if self.extension not in allowed_extensions:
            return False
        allowed_mimes = set(mime_types)
        return not allowed_mimes or self.mime_type in allowed_mimes

    def is_size_exceeded(self, max_bytes: int) -> bool:
        return self._record.size_bytes > max_bytes

    def image_dimensions(self) -> tuple[int, int]:
        """Return (width, height), read once from the temp file.

        Raises:
            ImageDimensionsError: if the file is not an image or cannot be decoded.
        """
        if self._dimensions is not None:
            return self._dimensions
        if not self.mime_type.startswith("image/"):
            raise ImageDimensionsError("not_image")
        try:
            with Image.open(self.temp_location) as image:
                self._dimensions = image.size
        except (UnidentifiedImageError, OSError) as exc:
            Log.warning(f"Could not read image dimensions: {exc}", path=self.temp_location)
            raise ImageDimensionsError("image_unreadable") from exc
        return self._dimensions

    def move(self, destination: str | os.PathLike[str], new_name: str | None = None) -> Path:
        """Move the temp file into ``destination`` and return the new path.

        Only the final path component of the target name is used, and it must
        name a file directly inside ``destination``. A failed
        move leaves ``final_path`` unset; partially written files are not
        cleaned up.

        Raises:
            DestinationError: if ``destination`` is not an existing writable directory.
            FileMoveError: if the target name is unusable or the move itself fails.
        """
        directory = Path(destination)
        if not directory.exists():
            raise DestinationError(f"Destination directory does not exist: {directory}")
        if not directory.is_dir():
            raise DestinationError(f"Destination is not a directory: {directory}")
        if not os.access(directory, os.W_OK):
            raise DestinationError(f"Destination directory is not writable: {directory}")

        filename = Path(new_name if new_name is not None else self._record.name).name
        if not filename:
            raise FileMoveError("Target file name is empty")
        if filename in (".", ".."):
            raise FileMoveError(f"Invalid target file name: {filename}")
        target = directory / filename
        if target.resolve().parent != directory.resolve():
            raise FileMoveError(f"Target {target} is outside {directory}")
        try:
            shutil.move(str(self.temp_location), str(target))
        except OSError as exc:
            raise FileMoveError(f"Failed to move {self.temp_location} to {target}") from exc

        self.final_path = target
        Log.info(f"Moved uploaded file {self._record.name}", path=target)
        return target
