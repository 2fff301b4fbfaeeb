"""A file together with its filename and content type."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, BinaryIO


@dataclass
class FileWithMetadata:
    """A readable binary stream with an optional filename and content type."""

    data: BinaryIO
    filename: str | None = None
    content_type: str | None = None

    def __post_init__(self) -> None:
        if self.data is None:
            raise ValueError("required parameters: 'data' is required")

    def __enter__(self) -> FileWithMetadata:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.data.close()


def _optional_string(m: Mapping[str, Any], key: str) -> str | None:
    value = m.get(key)
    if value is not None and not isinstance(value, str):
        raise TypeError(f"property {key!r} must be a string, not {type(value).__name__}")
    return value


def unmarshal_file_with_metadata(m: Mapping[str, Any]) -> FileWithMetadata:
    """Build a FileWithMetadata from a decoded JSON object.

    The "data" property is a path to the file whose contents become the
    data stream; "filename" and "content_type" are optional strings.
    """
    path = m.get("data")
    if not isinstance(path, str):
        raise TypeError("property 'data' must be a string path")
    filename = _optional_string(m, "filename")
    content_type = _optional_string(m, "content_type")
    data = open(path, "rb")  # noqa: SIM115 - ownership passes to the model
    return FileWithMetadata(data=data, filename=filename, content_type=content_type)