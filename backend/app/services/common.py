"""Helpers shared by the service modules."""


def parse_id(raw: str | int | None) -> int | None:
    """
    Parse a path identifier.

    Returns None for anything that is not a positive integer so callers can
    report a malformed id exactly like a missing record.
    """
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if raw is None:
        return None
    raw = raw.strip()
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value > 0 else None
