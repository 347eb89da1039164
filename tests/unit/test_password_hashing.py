"""Unit tests for password hashing."""

import pytest

from resumekit.contexts.accounts.auth import hash_password, verify_password


@pytest.mark.unit
def test_hash_round_trip():
    stored = hash_password("correct-horse", iterations=1000)
    assert verify_password("correct-horse", stored)
    assert not verify_password("wrong-horse", stored)


@pytest.mark.unit
def test_hash_is_salted():
    assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)


@pytest.mark.unit
def test_hash_format():
    algorithm, iterations, salt, digest = hash_password("pw", salt=b"\x00" * 16, iterations=1000).split("$")
    assert algorithm == "pbkdf2_sha256"
    assert iterations == "1000"
    assert salt == "00" * 16
    assert len(digest) == 64


@pytest.mark.unit
@pytest.mark.parametrize("stored", ["", "plain-text", "md5$1$00$00"])
def test_verify_rejects_malformed_hashes(stored):
    assert not verify_password("pw", stored)
