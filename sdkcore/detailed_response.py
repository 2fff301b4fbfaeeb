"""The response information received from a server."""

from __future__ import annotations

import base64
import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from requests.structures import CaseInsensitiveDict


@dataclass
class DetailedResponse:
    """Status code, headers and body of a service response.

    ``result`` holds the decoded body (or a stream for non-JSON successes, or
    a generic dict for JSON error responses); ``raw_result`` holds the raw
    body when it could not be decoded or was a non-JSON error response.
    """

    status_code: int = 0
    headers: Mapping[str, Any] = field(default_factory=CaseInsensitiveDict)
    result: Any = None
    raw_result: bytes | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers or {})

    def result_as_map(self) -> dict[str, Any] | None:
        """Return the result if it is a generic JSON object, otherwise None."""
        return self.result if isinstance(self.result, dict) else None

    def to_json(self) -> str:
        """Serialize the response as indented JSON.

        Raises TypeError if the result cannot be serialized.
        """
        document = {
            "StatusCode": self.status_code,
            "Headers": dict(self.headers),
            "Result": self.result,
            "RawResult": (
                base64.b64encode(self.raw_result).decode("ascii")
                if self.raw_result is not None
                else None
            ),
        }
        return json.dumps(document, indent=4, default=_encode)

    def __str__(self) -> str:
        try:
            return self.to_json() + "\n"
        except (TypeError, ValueError) as exc:
            return f"Error marshalling DetailedResponse instance: {exc}"


def _encode(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")