import io
from pathlib import Path

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def png_file(tmp_path: Path) -> Path:
    """A 200x100 PNG stored under an extensionless temp name."""
    path = tmp_path / "upload_png"
    Image.new("RGB", (200, 100), color=(255, 0, 0)).save(path, format="PNG")
    return path


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def pdf_file(tmp_path: Path, sample_pdf_bytes: bytes) -> Path:
    path = tmp_path / "upload_pdf"
    path.write_bytes(sample_pdf_bytes)
    return path


@pytest.fixture()
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "upload_txt"
    path.write_text("plain text notes\nsecond line\n")
    return path


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    path = tmp_path / "uploads"
    path.mkdir()
    return path
