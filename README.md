# sdkcore

Building blocks for REST API client SDKs.

## What it provides

- `sdkcore.datetime_utils`: date and date-time handling.
  - `parse_date(s)` reads `YYYY-MM-DD` into a `datetime.date`. An empty string
    gives 1970-01-01. Anything else that is not a full date raises `ValueError`.
  - `parse_date_time(s)` returns a timezone-aware UTC `datetime`. It accepts:
    - RFC 3339 with or without fractional seconds, cut to microseconds;
    - tz-offsets written `Z`, `+HH`, `+HHMM` or `+HH:MM`;
    - minute precision when a tz-offset is given;
    - values with no tz-offset, which are taken as UTC;
    - the form `YYYY-MM-DD hh:mm:ss`.

    An empty string gives the Unix epoch. Anything it cannot parse raises `ValueError`.
  - `format_date(d)` writes `YYYY-MM-DD`.
  - `format_date_time(dt)` writes UTC with millisecond precision, for example
    `2016-06-20T04:25:16.218Z`.
  - `normalize_date_time_utc(dt)` converts a value to UTC. A naive value is taken
    to be UTC already.
- `sdkcore.detailed_response`: `DetailedResponse`, a dataclass with the fields
  `status_code`, `headers`, `result` and `raw_result`.
  - `headers` is kept case-insensitive.
  - `result_as_map()` returns `result` if it is a dict, and `None` otherwise.
  - `to_json()` serializes the response as indented JSON. `raw_result` and any
    bytes in it are written as base64, and dataclass results are written as
    objects.
  - `str()` gives the same JSON, or an error message if the result cannot be
    serialized.
- `sdkcore.file_with_metadata`: file streams with metadata.
  - `FileWithMetadata` holds a binary `data` stream with an optional `filename`
    and `content_type`. `data` is required. The object is a context manager, and
    leaving the `with` block closes the stream.
  - `unmarshal_file_with_metadata(m)` builds one from a decoded JSON object. It
    opens the file named by the `"data"` path. `TypeError` is raised if a
    property has the wrong type.
- `sdkcore.compression`: streaming gzip wrappers. Each takes a binary file-like
  object or a bytes value.
  - `gzip_compression_reader(src)` returns a reader that yields the
    gzip-compressed form of the source. It reads the source lazily, as it is
    consumed.
  - `gzip_decompression_reader(src)` returns a reader of the decompressed data.
    It raises `EOFError` on empty input and `gzip.BadGzipFile` when the input
    does not start with a gzip header.
- `sdkcore.cp4d_authenticator`: `CloudPakForDataAuthenticator`. It gets a bearer
  token by POSTing a username and either a password or an API key to
  `<url>/v1/authorize`.
  - It caches the token until the JWT `exp` claim.
  - Once 80% of the token's lifetime has passed, it fetches a fresh token in the
    background while it goes on returning the cached one.
  - `authenticate(request)` sets `Authorization: Bearer <token>` on the request's
    `headers`.
  - `get_token()` returns the token on its own.

## Installation

```
pip install sdkcore
```

## Examples

Date-times:

```python
from sdkcore.datetime_utils import parse_date_time, format_date_time

dt = parse_date_time("2016-06-20T00:25:16.218-04")
print(format_date_time(dt))  # 2016-06-20T04:25:16.218Z
```

Gzip round trip:

```python
import io
from sdkcore.compression import gzip_compression_reader, gzip_decompression_reader

compressed = gzip_compression_reader(io.BytesIO(b"Hello world!")).read()
original = gzip_decompression_reader(compressed).read()
```

Authenticating requests:

```python
import requests
from sdkcore.cp4d_authenticator import new_authenticator_using_apikey

authenticator = new_authenticator_using_apikey(
    "https://cp4d.example.com", "user", apikey="placeholder"
)
request = requests.Request("GET", "https://cp4d.example.com/api/things")
authenticator.authenticate(request)
```

### Building an authenticator

There are three ways to build one:

- Call `CloudPakForDataAuthenticator(url, username, password=..., apikey=...)`
  directly.
- Use `new_authenticator_using_password` or `new_authenticator_using_apikey`.
- Use `CloudPakForDataAuthenticator.from_properties(props)`. It reads the keys
  `AUTH_URL`, `USERNAME`, `PASSWORD`, `APIKEY` and `AUTH_DISABLE_SSL`.

A few settings change how the token service is called:

- `disable_ssl_verification=True` turns off certificate checks on the session
  that the authenticator creates.
- `headers` are added to every token request.
- A `requests.Session` of your own can be passed as `session`. When the
  authenticator creates its own session instead, it uses a 30-second timeout.

### Errors

- A configuration that is missing the username or URL raises `ValueError`.
- So does one that gives both or neither of a password and an API key.
- A token service reply outside the 2xx range raises `AuthenticationError`.
  Its `response` attribute holds the `DetailedResponse` of the failed call.
- A reply that is not valid JSON, or a token that is not a JWT, raises
  `ValueError`.

## What it does not do

The package has no general service client and no request builder. The only
authentication scheme it provides is the Cloud Pak for Data authenticator.
Debug messages about token requests go to the standard `logging` module.
Nothing here configures logging.

## Running the tests

```
pip install "sdkcore[test]"
pytest
```