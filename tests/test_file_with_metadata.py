import io
import json

import pytest

from sdkcore.file_with_metadata import FileWithMetadata, unmarshal_file_with_metadata


def test_file_with_metadata_fields():
    data = io.BytesIO(b"test")
    model = FileWithMetadata(data=data, filename="test.txt", content_type="application/octet-stream")
    assert model.data.read() == b"test"
    assert model.filename == "test.txt"
    assert model.content_type == "application/octet-stream"


def test_new_file_with_metadata():
    model = FileWithMetadata(io.BytesIO(b"test"))
    assert model.data.read() == b"test"
    assert model.filename is None
    assert model.content_type is None


def test_file_with_metadata_requires_data():
    with pytest.raises(ValueError):
        FileWithMetadata(None)


def test_unmarshal_file_with_metadata(tmp_path):
    file_path = tmp_path / "test-file.txt"
    file_path.write_bytes(b"test")
    document = json.loads(
        json.dumps({"data": str(file_path), "filename": "test-file.txt", "content_type": "text/plain"})
    )

    with unmarshal_file_with_metadata(document) as model:
        assert model.data.read() == b"test"
        assert model.filename == "test-file.txt"
        assert model.content_type == "text/plain"
    assert model.data.closed


def test_unmarshal_file_with_metadata_optional_fields(tmp_path):
    file_path = tmp_path / "only-data.bin"
    file_path.write_bytes(b"\x00\x01")
    with unmarshal_file_with_metadata({"data": str(file_path)}) as model:
        assert model.data.read() == b"\x00\x01"
        assert model.filename is None
        assert model.content_type is None


def test_unmarshal_file_with_metadata_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        unmarshal_file_with_metadata({"data": str(tmp_path / "absent.txt")})


def test_unmarshal_file_with_metadata_missing_data():
    with pytest.raises(TypeError):
        unmarshal_file_with_metadata({"filename": "test-file.txt"})


def test_unmarshal_file_with_metadata_bad_filename_type(tmp_path):
    file_path = tmp_path / "test-file.txt"
    file_path.write_bytes(b"test")
    with pytest.raises(TypeError):
        unmarshal_file_with_metadata({"data": str(file_path), "filename": 42})