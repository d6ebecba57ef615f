"""Tests for password hashing and the token codec."""
import time

import jwt
import pytest

from jobs_platform.jobs_platform.account_service.auth import (
    build_password_context,
    create_access_token,
    decode_access_token,
    extract_bearer_token,
    hash_password,
    verify_password,
)
from jobs_platform.jobs_platform.account_service.schemas import SessionClaims

SECRET = "token-codec-test-secret-with-enough-bytes"


@pytest.fixture(scope="module")
def pwd_context():
    return build_password_context(1000)


def make_claims(offset=0):
    now = int(time.time()) + offset
    return SessionClaims(user_id=7, user_type="employer", issued_at=now, expires_at=now + 3600)


def test_hash_is_salted(pwd_context):
    first = hash_password(pwd_context, "same-password")
    second = hash_password(pwd_context, "same-password")

    assert first != second
    assert first.startswith("$pbkdf2-sha256$1000$")
    assert verify_password(pwd_context, "same-password", first)
    assert verify_password(pwd_context, "same-password", second)


def test_verify_password_mismatch(pwd_context):
    hashed = hash_password(pwd_context, "right")
    assert not verify_password(pwd_context, "wrong", hashed)


def test_verify_password_with_plaintext_stored_value(pwd_context):
    assert not verify_password(pwd_context, "p1", "p1")


def test_token_round_trip_uses_wire_claim_names():
    claims = make_claims()
    token = create_access_token(claims, SECRET, "HS256")

    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert set(payload) == {"userId", "userType", "iat", "exp"}
    assert decode_access_token(token, SECRET, "HS256") == claims


def test_decode_rejects_expired_token():
    token = create_access_token(make_claims(offset=-7200), SECRET, "HS256")
    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token, SECRET, "HS256")


def test_decode_rejects_missing_claims():
    token = jwt.encode({"userId": 7, "exp": int(time.time()) + 60}, SECRET, algorithm="HS256")
    with pytest.raises(jwt.MissingRequiredClaimError):
        decode_access_token(token, SECRET, "HS256")


def test_decode_rejects_other_algorithm():
    token = jwt.encode(make_claims().model_dump(by_alias=True), SECRET, algorithm="HS512")
    with pytest.raises(jwt.InvalidAlgorithmError):
        decode_access_token(token, SECRET, "HS256")


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer abc", "abc"),
        ("Bearer   abc  ", "abc"),
        ("Bearer ", None),
        ("abc", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected
