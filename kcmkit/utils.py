"""Small helpers for credentials, file checks and encoded configuration values."""

from __future__ import annotations

import base64
import binascii
import os
import re

BASE64_TOKEN = "base64"

_COMPLEX_VALUE = re.compile(r"(\w+)\((.*)\)", re.ASCII)


def basic_auth(username: str, password: str) -> str:
    """Return the base64 credentials of an HTTP Basic Authorization header.

    The user id and password are joined by a single colon and encoded with
    standard base64; the result is not URL-encoded.
    """
    return base64.b64encode(f"{username}:{password}".encode()).decode("ascii")


def file_exists(path: str | os.PathLike[str]) -> bool:
    """Report whether ``path`` exists.

    A missing path gives ``False``; any other failure, such as a denied
    permission, is raised.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True


def extract_from_complex_value(value: str) -> str:
    """Unwrap values of the form ``base64(<payload>)``, repeatedly.

    Each ``base64(...)`` wrapper is decoded until the value is no longer
    wrapped or the wrapper name is unknown, in which case the value is
    returned as it stands. Invalid base64 raises ``ValueError``.
    """
    while True:
        match = _COMPLEX_VALUE.fullmatch(value)
        if match is None:
            return value

        outer, payload = match.groups()
        if outer != BASE64_TOKEN:
            return value

        try:
            decoded = base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise ValueError(f"invalid base64 payload: {payload!r}") from exc

        value = decoded.decode("utf-8", errors="surrogateescape")