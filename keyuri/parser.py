"""
Parse and build otpauth:// key URIs as defined by the Google Authenticator
Key URI Format.

Only the ``totp`` type is supported.

Reference: https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""

import logging
import re
import urllib.parse
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from core.base32 import has_invalid_padding, is_base32
from keyuri.query import parse_query_string

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


SCHEME = "otpauth"
SUPPORTED_TYPE = "totp"
DEFAULT_ALGORITHM = Algorithm.SHA1
DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30

_ALGORITHM_NAMES = frozenset(alg.value for alg in Algorithm)

# Same shape int.TryParse accepts: optional ASCII whitespace and sign, ASCII digits.
_INT_RE = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+[ \t\n\v\f\r]*")
_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1


class InvalidUriError(ValueError):
    """Raised when an otpauth URI cannot be turned into a record."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


@dataclass
class OtpUriRecord:
    """Parsed representation of an otpauth://totp URI."""

    secret: str          # base32, trailing '=' removed
    label: str           # account name, without the issuer prefix
    issuer: str = ""
    algorithm: Algorithm = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    otp_type: str = SUPPORTED_TYPE


# ── Parsing ───────────────────────────────────────────────────────────────────

def _fail(reason: str) -> InvalidUriError:
    logger.debug("Rejected otpauth URI: %s", reason)
    return InvalidUriError(reason)


def _parse_int(value: Optional[str]) -> Optional[int]:
    """Return ``value`` as a 32-bit int, or None if it is not one."""
    if value is None or not _INT_RE.fullmatch(value):
        return None
    number = int(value)
    if not _INT32_MIN <= number <= _INT32_MAX:
        return None
    return number


def _secret(params: Dict[str, Optional[str]]) -> str:
    raw = params.get("secret")
    if raw is None or not raw.strip():
        raise _fail("No secret provided.")
    if has_invalid_padding(raw) or not is_base32(raw):
        raise _fail("Secret is not valid base32.")
    return raw.rstrip("=")


def _algorithm(params: Dict[str, Optional[str]]) -> Algorithm:
    if "algorithm" not in params:
        return DEFAULT_ALGORITHM
    value = params["algorithm"]
    if value not in _ALGORITHM_NAMES:
        raise _fail(
            f"Unsupported algorithm '{value}'. Supported: SHA1, SHA256, SHA512."
        )
    return Algorithm(value)


def _integer(params: Dict[str, Optional[str]], name: str, default: int) -> int:
    if name not in params:
        return default
    number = _parse_int(params[name])
    if number is None:
        raise _fail(f"'{name}' must be an integer.")
    return number


def parse_key_uri(uri: Union[str, urllib.parse.SplitResult, None]) -> OtpUriRecord:
    """
    Parse and validate an ``otpauth://totp/`` URI.

    Args:
        uri: Full URI string, or one already split by
             :func:`urllib.parse.urlsplit`.

    Returns:
        Populated :class:`OtpUriRecord`.

    Raises:
        InvalidUriError: If the URI is missing, uses another scheme or type,
            or carries an invalid secret, algorithm, digits, period or label.
    """
    if uri is None:
        raise _fail("URI must not be empty.")

    if isinstance(uri, urllib.parse.SplitResult):
        parsed = uri
    else:
        try:
            parsed = urllib.parse.urlsplit(uri.strip())
        except ValueError as exc:
            raise _fail(f"Malformed URI: {exc}") from exc

    if parsed.scheme.lower() != SCHEME:
        raise _fail(f"URI scheme must be '{SCHEME}', got '{parsed.scheme}'.")

    otp_type = parsed.netloc.lower()
    if otp_type != SUPPORTED_TYPE:
        raise _fail(f"Unsupported OTP type '{otp_type}'. Only totp is supported.")

    params = parse_query_string(parsed.query)

    secret = _secret(params)
    algorithm = _algorithm(params)
    digits = _integer(params, "digits", DEFAULT_DIGITS)
    period = _integer(params, "period", DEFAULT_PERIOD)

    # Label is the path component (strip leading slashes)
    raw_label = urllib.parse.unquote(parsed.path.lstrip("/"))
    if not raw_label:
        raise _fail("Missing label in otpauth URI.")

    # "Issuer:AccountName" or just "AccountName"
    if ":" in raw_label:
        issuer, label = raw_label.split(":", 1)
    else:
        issuer, label = "", raw_label

    # The query param wins over the label prefix
    if params.get("issuer") is not None:
        issuer = params["issuer"]

    if not label.strip():
        raise _fail("Missing label in otpauth URI.")

    logger.debug(
        "Parsed otpauth URI for label %r (issuer %r, %s, %d digits, %ds)",
        label, issuer, algorithm.value, digits, period,
    )
    return OtpUriRecord(
        otp_type=otp_type,
        secret=secret,
        algorithm=algorithm,
        digits=digits,
        period=period,
        label=label,
        issuer=issuer,
    )


# ── Building ──────────────────────────────────────────────────────────────────

def _quote(text: str) -> str:
    return urllib.parse.quote(text, safe="")


def build_key_uri(record: OtpUriRecord) -> str:
    """
    Build an otpauth:// URI from a record.

    Parameters equal to their defaults are left out to keep the URI short;
    ``secret`` and ``issuer`` are always written.  The record is not
    validated.
    """
    params = []
    if record.period != DEFAULT_PERIOD:
        params.append(("period", str(record.period)))
    if record.digits != DEFAULT_DIGITS:
        params.append(("digits", str(record.digits)))
    algorithm = Algorithm(record.algorithm).value
    if algorithm != DEFAULT_ALGORITHM.value:
        params.append(("algorithm", algorithm))
    params.append(("secret", record.secret))
    params.append(("issuer", record.issuer))

    query = "&".join(f"{key}={_quote(value)}" for key, value in params)
    path = f"/{_quote(record.issuer)}:{_quote(record.label)}"
    return f"{SCHEME}://{record.otp_type}{path}?{query}"
