"""Default avatar URLs derived from an email address (Gravatar)."""

import hashlib
from urllib.parse import urlencode

GRAVATAR_BASE = "https://www.gravatar.com/avatar"


def gravatar_url(
    email: str,
    size: int = 200,
    default: str = "retro",
    rating: str = "x",
) -> str:
    """
    Build the Gravatar URL for an email.

    Gravatar keys avatars by the MD5 of the trimmed, lower-cased address.
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_BASE}/{digest}?{query}"
