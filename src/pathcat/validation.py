"""URI reference well-formedness check."""

import re
from urllib.parse import urlsplit


# RFC 3986 unreserved + reserved + "%", extended with non-ASCII IRI characters.
_URI_CHARS = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%\u00a0-\U0010ffff]*$")
_BAD_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_HOST_REQUIRED = frozenset({"http", "https", "ws", "wss", "ftp"})


def is_well_formed_uri(text: str) -> bool:
    """
    Check that ``text`` is a well-formed absolute or relative URI reference.

    Args:
        text: Candidate URI reference

    Returns:
        True when the text may be used as a URL template

    Examples:
        >>> is_well_formed_uri("/users/:id")
        True
        >>> is_well_formed_uri("not a valid url")
        False
    """
    if not isinstance(text, str):
        return False
    if not _URI_CHARS.match(text) or _BAD_PERCENT.search(text):
        return False

    try:
        parts = urlsplit(text)
        # raises ValueError for malformed ports
        parts.port
    except ValueError:
        return False

    if parts.scheme and not _SCHEME.match(parts.scheme):
        return False
    if parts.netloc and parts.netloc.count("@") > 1:
        return False
    if parts.netloc and not parts.hostname:
        return False
    if parts.scheme.lower() in _HOST_REQUIRED and not parts.hostname:
        return False
    return True


__all__ = ["is_well_formed_uri"]
