"""Tests for core.base32."""

import pytest

from core.base32 import BASE32_ALPHABET, has_invalid_padding, is_base32


_DATA = [
    "JBSWY3DPEHPK3PXP",
    "jbswy3dpehpk3pxp",
    "MzXw6",
    "A",
    "234567",
    "".join(sorted(BASE32_ALPHABET)),
]


# ── Valid secrets ─────────────────────────────────────────────────────────────

@pytest.mark.parametrize("data", _DATA)
@pytest.mark.parametrize("padding", [0, 1, 3, 4, 6])
def test_valid_secret_with_allowed_padding(data: str, padding: int) -> None:
    secret = data + "=" * padding
    assert is_base32(secret)
    assert not has_invalid_padding(secret)


# ── is_base32 ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("secret", [
    "",
    None,
    "=",
    "========",
    "JBSWY3DPEHPK3PXP1",
    "JBSWY3DPEHPK3PX0",
    "JBSWY3DP EHPK3PXP",
    "JBSWY3DP-EHPK3PXP",
    "JBSW=Y3DP",
    "ÄBCD",
    "ıſAB",
    "ſECRET",
    "ﬀ",
])
def test_is_base32_rejects(secret) -> None:
    assert not is_base32(secret)


@pytest.mark.parametrize("char", list("0189!@#+/_-"))
def test_is_base32_rejects_foreign_character(char: str) -> None:
    assert not is_base32("JBSW" + char + "Y3DP")


# ── has_invalid_padding ───────────────────────────────────────────────────────

@pytest.mark.parametrize("secret", [
    "JBSW=Y3DP",
    "=JBSWY3DP",
    "JBSWY3D=P=",
    "JBSWY3DP==",
    "JBSWY3DP=====",
    "JBSWY3DP=======",
    "JBSWY3DP========",
])
def test_has_invalid_padding(secret: str) -> None:
    assert has_invalid_padding(secret)


@pytest.mark.parametrize("secret", ["", None, "JBSWY3DP", "A1B2", "======"])
def test_has_invalid_padding_false_without_bad_padding(secret) -> None:
    assert not has_invalid_padding(secret)
