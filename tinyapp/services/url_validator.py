"""
Long URL normalization and validation.

validate_url answers yes/no and never raises; normalize_url is the
raising variant the services use before storing anything.
"""

from pydantic import AnyHttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tinyapp.exceptions import InvalidURLError

# AnyHttpUrl, not HttpUrl: HttpUrl caps URLs at 2083 characters
_http_url = TypeAdapter(AnyHttpUrl)


def add_scheme(url: str) -> str:
    """
    Prefix `http://` unless the URL already starts with http:// or https://.

    The check is a case-sensitive prefix match, so the function is idempotent.
    """
    if url.startswith("http://") or url.startswith("https://"):
        return url
    return "http://" + url


def validate_url(url: str) -> bool:
    """
    Return True if `url` is a structurally valid absolute http(s) URL.

    False for empty strings, anything containing whitespace, and URLs
    without a host such as "http://".
    """
    if not isinstance(url, str) or not url:
        return False
    if any(char.isspace() for char in url):
        return False

    try:
        parsed = _http_url.validate_python(url)
    except PydanticValidationError:
        return False

    return bool(parsed.host)


def normalize_url(url: str) -> str:
    """
    Add a scheme to `url` and validate the result.

    Raises:
        InvalidURLError: If the URL is empty or malformed
    """
    if not url:
        raise InvalidURLError()

    normalized = add_scheme(url)
    if not validate_url(normalized):
        raise InvalidURLError()
    return normalized
