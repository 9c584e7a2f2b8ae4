import pytest

from fieldguard.validation.formatting import escape_html, format_bytes, slugify


class TestFormatBytes:
    @pytest.mark.parametrize(
        ("size", "expected"),
        [
            (0, "0 B"),
            (512, "512 B"),
            (1023, "1023 B"),
            (1024, "1 KB"),
            (1536, "1.5 KB"),
            (2097152, "2 MB"),
            (5 * 1024**3, "5 GB"),
            (1234567, "1.18 MB"),
        ],
    )
    def test_renders_largest_unit(self, size: int, expected: str) -> None:
        assert format_bytes(size) == expected

    def test_caps_at_terabytes(self) -> None:
        assert format_bytes(2048 * 1024**4) == "2048 TB"

    def test_negative_is_zero(self) -> None:
        assert format_bytes(-5) == "0 B"

    def test_precision(self) -> None:
        assert format_bytes(1234567, precision=0) == "1 MB"


class TestSlugify:
    def test_replaces_punctuation_and_spaces(self) -> None:
        assert slugify("Hello, World! v1.0") == "Hello__World__v1_0"

    def test_keeps_letters_and_digits(self) -> None:
        assert slugify("abc123") == "abc123"


class TestEscapeHtml:
    def test_escapes_all_special_characters(self) -> None:
        assert escape_html("<>&\"'") == "&lt;&gt;&amp;&quot;&#x27;"

    def test_leaves_non_strings(self) -> None:
        assert escape_html(5) == 5
        assert escape_html(None) is None

    def test_escapes_sequences(self) -> None:
        assert escape_html(("<a>", 1)) == ("&lt;a&gt;", 1)

    def test_escapes_dict_values_and_keeps_keys(self) -> None:
        assert escape_html({"<k>": "<script>x</script>", "n": 1}) == {
            "<k>": "&lt;script&gt;x&lt;/script&gt;",
            "n": 1,
        }

    def test_escapes_sets(self) -> None:
        assert escape_html({"<a>", "b"}) == {"&lt;a&gt;", "b"}
        assert escape_html(frozenset({"<a>"})) == frozenset({"&lt;a&gt;"})

    def test_escapes_nested_containers(self) -> None:
        assert escape_html({"tags": ["<b>"]}) == {"tags": ["&lt;b&gt;"]}
