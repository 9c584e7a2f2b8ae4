from fieldguard.validation.models import (
    MISSING,
    FileField,
    FileRecord,
    InputRecord,
    ScalarField,
    UploadError,
)


class TestFileRecord:
    def test_from_mapping(self) -> None:
        record = FileRecord.from_mapping(
            {
                "name": "cv.pdf",
                "temp_location": "/tmp/php123",
                "declared_type": "application/pdf",
                "upload_error_code": 0,
                "size_bytes": "2048",
            }
        )
        assert record == FileRecord("cv.pdf", "/tmp/php123", "application/pdf", 0, 2048)

    def test_from_mapping_defaults(self) -> None:
        record = FileRecord.from_mapping({"name": "a.txt", "temp_location": "/tmp/x"})
        assert record.upload_error_code == UploadError.OK
        assert record.size_bytes == 0
        assert record.declared_type == ""


class TestInputRecord:
    def test_lookup_tags_values(self) -> None:
        record = FileRecord(name="a.png", temp_location="/tmp/a")
        data = InputRecord(
            {
                "title": "Hi",
                "tags": ["a", "b"],
                "avatar": record,
                "cv": {"name": "cv.pdf", "temp_location": "/tmp/cv", "size_bytes": 5},
            }
        )

        assert data.lookup("title") == ScalarField("Hi")
        assert data.lookup("tags") == ScalarField(["a", "b"])
        assert data.lookup("avatar") == FileField(record)
        cv = data.lookup("cv")
        assert isinstance(cv, FileField)
        assert cv.record.size_bytes == 5
        assert data.lookup("missing") is MISSING

    def test_plain_mapping_is_scalar(self) -> None:
        data = InputRecord({"meta": {"key": "value"}})
        assert data.lookup("meta") == ScalarField({"key": "value"})

    def test_snapshot_is_independent_of_source(self) -> None:
        source = {"a": "1"}
        data = InputRecord(source)
        source["b"] = "2"
        assert "b" not in data
        assert len(data) == 1

    def test_value_returns_record_for_files(self) -> None:
        record = FileRecord(name="a.png", temp_location="/tmp/a")
        data = InputRecord({"avatar": record, "n": 3})
        assert data.value("avatar") is record
        assert data.value("n") == 3

    def test_missing_is_falsy(self) -> None:
        assert not MISSING
        assert repr(MISSING) == "MISSING"
