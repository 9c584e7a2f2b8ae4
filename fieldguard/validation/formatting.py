import html
import re
from typing import Any

_UNITS = ("B", "KB", "MB", "GB", "TB")
_SLUG_CHARS_RE = re.compile(r"""[~`@!#$%^&*()_\-+=\[\]{}':";><.,/|\\? ]""")


def format_bytes(size: int, precision: int = 2) -> str:
    """Render a byte count in the largest unit where it is still >= 1, e.g. "1.5 KB"."""
    value = float(max(size, 0))
    unit = 0
    while value >= 1024 and unit < len(_UNITS) - 1:
        value /= 1024
        unit += 1
    number = f"{round(value, precision):.{precision}f}"
    if "." in number:
        number = number.rstrip("0").rstrip(".")
    return f"{number} {_UNITS[unit]}"


def slugify(value: str) -> str:
    """Replace punctuation and spaces with underscores."""
    return _SLUG_CHARS_RE.sub("_", value)


def escape_html(value: Any) -> Any:
    """HTML-escape strings (quotes included), recursing into containers.

    Dicts keep their keys and have their values escaped; lists, tuples, sets
    and frozensets are escaped element-wise. Other values are returned as-is.
    """
    if isinstance(value, str):
        return html.escape(value, quote=True)
    if isinstance(value, dict):
        return {key: escape_html(item) for key, item in value.items()}
    if isinstance(value, list):
        return [escape_html(item) for item in value]
    if isinstance(value, tuple):
        return tuple(escape_html(item) for item in value)
    if isinstance(value, frozenset):
        return frozenset(escape_html(item) for item in value)
    if isinstance(value, set):
        return {escape_html(item) for item in value}
    return value
