import gzip
import io
import json

import pytest

from sdkcore.compression import gzip_compression_reader, gzip_decompression_reader


def _round_trip(src: bytes) -> tuple[bytes, bytes]:
    compressed = gzip_compression_reader(io.BytesIO(src)).read()
    decompressed = gzip_decompression_reader(io.BytesIO(compressed)).read()
    return compressed, decompressed


def test_gzip_compression_string1():
    src = b"Hello world!"
    _, decompressed = _round_trip(src)
    assert decompressed == src


def test_gzip_compression_string2():
    src = (
        b"This is a somewhat longer string, which we'll try to use in our "
        b"compression/decompression testing.  Hopefully this will workout ok, but who knows???"
    )
    _, decompressed = _round_trip(src)
    assert decompressed == src


def test_gzip_compression_string3():
    src = b"This is a string that should be able to be compressed by a LOT" + b"." * 400
    compressed, decompressed = _round_trip(src)
    assert decompressed == src
    assert len(compressed) < len(src)


def test_gzip_compression_json1():
    document = {
        "rules": [
            {
                "request_id": "request-0",
                "rule": {
                    "account_id": "00000000000000000000000000000000",
                    "name": "Go Test Rule #1",
                    "description": "This is the description for Go Test Rule #1.",
                    "rule_type": "user_defined",
                    "target": {
                        "service_name": "config-gov-sdk-integration-test-service",
                        "resource_kind": "bucket",
                        "additional_target_attributes": [
                            {"name": "resource_id", "operator": "is_not_empty"}
                        ],
                    },
                    "required_config": {
                        "description": "allowed_gb<=20 && location=='us-east'",
                        "and": [
                            {"property": "allowed_gb", "operator": "num_less_than_equals", "value": "20"},
                            {"property": "location", "operator": "string_equals", "value": "us-east"},
                        ],
                    },
                    "enforcement_actions": [{"action": "disallow"}],
                    "labels": ["GoSDKIntegrationTest"],
                },
            }
        ],
        "Transaction-Id": "example-transaction-id",
        "Headers": None,
    }
    src = json.dumps(document, indent=2).encode()
    _, decompressed = _round_trip(src)
    assert decompressed == src


def test_gzip_compression_json2():
    words = ["This", "is", "a", "test", "that ", "should", "demonstrate", "lots", "of", "compression"]
    src = json.dumps(words * 100000).encode()
    compressed, decompressed = _round_trip(src)
    assert decompressed == src
    assert len(compressed) * 10 < len(src)


def test_compressed_output_is_standard_gzip():
    src = b"Hello world!" * 50
    compressed = gzip_compression_reader(src).read()
    assert compressed[:2] == b"\x1f\x8b"
    assert gzip.decompress(compressed) == src


def test_compression_reader_small_reads():
    src = bytes(range(256)) * 20
    reader = gzip_compression_reader(io.BytesIO(src))
    pieces = []
    while chunk := reader.read(7):
        pieces.append(chunk)
    assert gzip.decompress(b"".join(pieces)) == src


def test_compression_of_empty_input():
    compressed = gzip_compression_reader(b"").read()
    assert gzip.decompress(compressed) == b""


def test_decompression_reader_accepts_standard_gzip():
    src = b"some data to compress"
    assert gzip_decompression_reader(gzip.compress(src)).read() == src


def test_decompression_reader_rejects_non_gzip():
    with pytest.raises(gzip.BadGzipFile):
        gzip_decompression_reader(io.BytesIO(b"plain text, not gzip"))


def test_decompression_reader_rejects_empty_input():
    with pytest.raises(EOFError):
        gzip_decompression_reader(io.BytesIO(b""))