"""Where a store reads from, where it writes to, and how it is keyed.

A raw location may carry the encryption IV as a suffix after the last
'#', for example:

    https://config.example.com/app.ini#0123456789abcdef

An empty suffix means the document is stored in plaintext.

"""

import os
from typing import NamedTuple
from typing import Optional
from typing import Tuple
from urllib.parse import urlsplit


DEFAULT_TIMEOUT_S = 30

# Locations containing this marker name a config that does not exist yet.
NEW_CONFIG_MARKER = "://new/"

EPHEMERAL_PREFIX = ":"

ENV_LOCATION = "SEALEDCONFIG_LOCATION"
ENV_FILENAME = "SEALEDCONFIG_FILENAME"
ENV_TIMEOUT = "SEALEDCONFIG_TIMEOUT"


def split_iv(raw: str) -> Tuple[str, Optional[bytes]]:
    idx = raw.rfind("#")
    if idx == -1:
        return raw, None
    iv = raw[idx + 1:]
    return raw[:idx], (iv.encode("utf8") if iv else None)


def is_new_config(location: str) -> bool:
    return NEW_CONFIG_MARKER in location


def is_remote(location: str) -> bool:
    return urlsplit(location).scheme.lower() in ("http", "https")


def local_path(location: str) -> str:
    if location.startswith("file://"):
        return location[len("file://"):]
    return location


def default_filename(location: str) -> str:
    """Local file that saves go to when none is given explicitly."""
    if not location or is_remote(location) or is_new_config(location):
        return ""
    return local_path(location)


class Settings(NamedTuple):
    location: str
    filename: Optional[str] = None
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        timeout = environ.get(ENV_TIMEOUT)
        try:
            timeout_s = float(timeout) if timeout else DEFAULT_TIMEOUT_S
        except ValueError:
            raise ValueError("%s must be a number of seconds, got %r" % (ENV_TIMEOUT, timeout))
        return cls(
            location=environ.get(ENV_LOCATION, ""),
            filename=environ.get(ENV_FILENAME) or None,
            timeout_s=timeout_s,
        )
