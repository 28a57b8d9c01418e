"""
Unit tests for the shared/ utility modules.

Covers:
- shared.validators      (parse_object_id, normalize_email)
- shared.generators      (generate_otp_code)
- shared.datetime_utils  (utcnow, ensure_utc)
- shared.crypto          (hash_password, verify_password, hash_code)
- shared.logging         (redact_sensitive_fields)
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

from errors import ValidationError
from shared.crypto import hash_code, hash_password, verify_password
from shared.datetime_utils import ensure_utc, utcnow
from shared.generators import OTP_MAX, OTP_MIN, generate_otp_code
from shared.logging import redact_sensitive_fields
from shared.validators import normalize_email, parse_object_id


# ---------------------------------------------------------------------------
# shared.validators
# ---------------------------------------------------------------------------


class TestParseObjectId:
    def test_hex_string(self):
        oid = ObjectId()
        assert parse_object_id(str(oid)) == oid

    def test_object_id_passthrough(self):
        oid = ObjectId()
        assert parse_object_id(oid) is oid

    @pytest.mark.parametrize("value", ["", "abc", "z" * 24, None, 123])
    def test_invalid_raises_validation_error(self, value):
        with pytest.raises(ValidationError) as exc:
            parse_object_id(value, "cause")
        assert exc.value.field == "cause"
        assert "Invalid cause id" in exc.value.message


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Jane@Example.COM", "jane@example.com"),
        ("  jane@example.com ", "jane@example.com"),
    ],
    ids=["case", "whitespace"],
)
def test_normalize_email(raw, expected):
    assert normalize_email(raw) == expected


# ---------------------------------------------------------------------------
# shared.generators
# ---------------------------------------------------------------------------


class TestGenerateOtpCode:
    def test_six_digits(self):
        for _ in range(50):
            code = generate_otp_code()
            assert len(code) == 6
            assert code.isdigit()

    def test_within_range(self):
        for _ in range(50):
            assert OTP_MIN <= int(generate_otp_code()) <= OTP_MAX

    def test_bounds_reachable(self, mocker):
        mocker.patch("shared.generators.secrets.randbelow", return_value=0)
        assert generate_otp_code() == "100000"
        mocker.patch(
            "shared.generators.secrets.randbelow", return_value=OTP_MAX - OTP_MIN
        )
        assert generate_otp_code() == "999999"


# ---------------------------------------------------------------------------
# shared.datetime_utils
# ---------------------------------------------------------------------------


def test_utcnow_is_aware():
    assert utcnow().tzinfo == timezone.utc


@pytest.mark.parametrize(
    "value, expected",
    [
        (datetime(2024, 1, 15, 12, 0), datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)),
        (
            datetime(2024, 1, 15, 14, 0, tzinfo=timezone(timedelta(hours=2))),
            datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc),
        ),
    ],
    ids=["naive_assumed_utc", "offset_converted"],
)
def test_ensure_utc(value, expected):
    result = ensure_utc(value)
    assert result == expected
    assert result.tzinfo == timezone.utc


# ---------------------------------------------------------------------------
# shared.crypto
# ---------------------------------------------------------------------------


class TestHashPassword:
    def test_differs_from_input(self):
        assert hash_password("secret") != "secret"

    def test_unique_salts(self):
        # argon2 produces a new salt each call
        assert hash_password("same") != hash_password("same")


class TestVerifyPassword:
    @pytest.mark.parametrize(
        "candidate, expected",
        [("correct_password", True), ("wrong_password", False)],
        ids=["correct", "wrong"],
    )
    def test_verify(self, candidate, expected):
        h = hash_password("correct_password")
        assert verify_password(candidate, h) is expected

    def test_invalid_hash_returns_false(self):
        assert verify_password("any", "not-a-valid-hash") is False


class TestHashCode:
    def test_known_value(self):
        assert hash_code("123456") == hashlib.sha256(b"123456").hexdigest()

    def test_hex64(self):
        h = hash_code("654321")
        assert len(h) == 64
        assert all(c in "0123456789abcdef" for c in h)

    def test_distinct_inputs(self):
        assert hash_code("111111") != hash_code("111112")


# ---------------------------------------------------------------------------
# shared.logging
# ---------------------------------------------------------------------------


class TestRedactSensitiveFields:
    def test_sensitive_keys_redacted(self):
        event = {
            "event": "login_failed",
            "password": "hunter2",
            "otp_hash": "abc",
            "access_token": "jwt",
            "email": "a@b.c",
        }
        out = redact_sensitive_fields(None, "info", event)
        assert out["password"] == "***REDACTED***"
        assert out["otp_hash"] == "***REDACTED***"
        assert out["access_token"] == "***REDACTED***"
        assert out["email"] == "a@b.c"
        assert out["event"] == "login_failed"
