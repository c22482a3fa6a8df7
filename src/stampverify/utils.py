import secrets
from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def random_hex(prefix: str) -> str:
    """Return `prefix` followed by 32 random bytes as hex (256 bits)."""
    return f"{prefix}-{secrets.token_hex(32)}"
