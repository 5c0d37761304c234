# tests/test_security.py

from __future__ import annotations

from datetime import timedelta

from taskmanager.utils.security import BcryptPasswordHasher, JwtTokenSigner


def test_bcrypt_hash_is_salted_and_verifies() -> None:
    hasher = BcryptPasswordHasher(rounds=4)

    first = hasher.hash("pw")
    second = hasher.hash("pw")
    assert first != "pw"
    assert first != second
    assert hasher.verify("pw", first)
    assert hasher.verify("pw", second)
    assert not hasher.verify("nope", first)


def test_signed_token_carries_subject_and_expiry() -> None:
    signer = JwtTokenSigner("k", expire_minutes=10)

    claims = signer.decode(signer.sign({"sub": "alice"}))
    assert claims["sub"] == "alice"
    assert claims["exp"] - claims["iat"] == 600


def test_token_from_other_key_is_rejected() -> None:
    token = JwtTokenSigner("one").sign({"sub": "alice"})
    assert JwtTokenSigner("two").decode(token) is None


def test_expired_token_is_rejected() -> None:
    signer = JwtTokenSigner("k")
    token = signer.sign({"sub": "alice"}, expires_delta=timedelta(seconds=-5))
    assert signer.decode(token) is None


def test_sign_does_not_mutate_claims() -> None:
    claims = {"sub": "alice"}
    JwtTokenSigner("k").sign(claims)
    assert claims == {"sub": "alice"}
