"""
Base32 secret validation (RFC 3548 / RFC 4648 alphabet).

These helpers only look at characters; they never decode the secret.
"""

from typing import Optional


# ── Alphabet ──────────────────────────────────────────────────────────────────

# ASCII only, both cases.
BASE32_ALPHABET = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
    "abcdefghijklmnopqrstuvwxyz"
)

# Trailing '=' counts that can end an 8-character Base32 block.
VALID_PADDING_LENGTHS = (0, 1, 3, 4, 6)


# ── Validation ────────────────────────────────────────────────────────────────

def is_base32(secret: Optional[str]) -> bool:
    """
    Check that ``secret`` only uses the Base32 alphabet.

    Trailing ``=`` padding is ignored and lowercase letters are accepted.

    Args:
        secret: Candidate secret string.

    Returns:
        True if at least one data character remains after removing the
        padding and every one of them is in ``A-Z2-7`` or ``a-z``.
    """
    if not secret:
        return False
    data = secret.rstrip("=")
    if not data:
        return False
    return all(ch in BASE32_ALPHABET for ch in data)


def has_invalid_padding(secret: Optional[str]) -> bool:
    """
    Check for misplaced or mis-sized ``=`` padding.

    Padding is invalid when an ``=`` shows up before the last data
    character, or when the trailing run is not 0, 1, 3, 4 or 6 long.
    """
    if not secret or "=" not in secret:
        return False
    data = secret.rstrip("=")
    if "=" in data:
        return True
    return (len(secret) - len(data)) not in VALID_PADDING_LENGTHS
