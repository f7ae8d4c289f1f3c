"""Tests for password hashing and session tokens."""

import jwt
import pytest

from blog_api.auth import security


class TestPasswords:
    def test_hash_is_salted_and_verifiable(self) -> None:
        first = security.hash_password("password")
        second = security.hash_password("password")

        assert first != second
        assert first != "password"
        assert security.verify_password("password", first)
        assert security.verify_password("password", second)

    def test_wrong_password_fails(self) -> None:
        hashed = security.hash_password("password")
        assert not security.verify_password("passw0rd", hashed)

    def test_garbage_hash_fails_without_raising(self) -> None:
        assert not security.verify_password("password", "not-a-bcrypt-hash")
        assert not security.verify_password("password", "")

    def test_empty_password_is_rejected(self) -> None:
        with pytest.raises(security.AuthSecurityError):
            security.hash_password("")

    def test_password_longer_than_bcrypt_limit_is_rejected(self) -> None:
        with pytest.raises(security.AuthSecurityError):
            security.hash_password("p" * 80)
        # 36 two-byte characters are exactly 72 bytes.
        assert security.verify_password("\u00e9" * 36, security.hash_password("\u00e9" * 36))

    def test_rounds_are_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PASS_CRYPTO_ROUNDS", "1")
        assert security.password_rounds() == 4
        monkeypatch.setenv("PASS_CRYPTO_ROUNDS", "99")
        assert security.password_rounds() == 31


class TestTokens:
    def test_round_trip_carries_username(self) -> None:
        token = security.issue_token("alice")
        payload = security.decode_token(token)

        assert payload["username"] == "alice"
        assert payload["exp"] - payload["iat"] == security.session_life_time_s()

    def test_lifetime_is_configurable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SESSION_LIFE_TIME", "120")
        payload = security.decode_token(security.issue_token("alice"))
        assert payload["exp"] - payload["iat"] == 120

    def test_expired_token_is_rejected(self) -> None:
        issued = security.now_epoch_s() - security.session_life_time_s() - 10
        token = security.issue_token("alice", now=issued)

        with pytest.raises(security.AuthSecurityError, match="expired"):
            security.decode_token(token)

    def test_foreign_signature_is_rejected(self) -> None:
        token = jwt.encode(
            {"username": "alice", "exp": security.now_epoch_s() + 60},
            "some-other-secret-with-enough-length",
            algorithm="HS256",
        )
        with pytest.raises(security.AuthSecurityError):
            security.decode_token(token)

    def test_token_without_username_is_rejected(self) -> None:
        token = jwt.encode(
            {"exp": security.now_epoch_s() + 60},
            security.jwt_secret(),
            algorithm="HS256",
        )
        with pytest.raises(security.AuthSecurityError):
            security.decode_token(token)

    @pytest.mark.parametrize("token", ["", "   ", "not.a.jwt"])
    def test_malformed_token_is_rejected(self, token: str) -> None:
        with pytest.raises(security.AuthSecurityError):
            security.decode_token(token)


class TestRefreshIfNearExpiry:
    def test_fresh_token_is_not_refreshed(self) -> None:
        now = security.now_epoch_s()
        payload = security.decode_token(security.issue_token("alice", now=now))
        assert security.refresh_if_near_expiry(payload, now=now) is None

    def test_token_inside_window_is_reissued(self) -> None:
        now = security.now_epoch_s()
        payload = {"username": "alice", "exp": now + security.session_refresh_threshold_s() - 1}

        fresh = security.refresh_if_near_expiry(payload, now=now)

        assert fresh is not None
        fresh_payload = security.decode_token(fresh)
        assert fresh_payload["username"] == "alice"
        assert fresh_payload["exp"] == now + security.session_life_time_s()

    def test_window_is_elapsed_time_not_calendar_day(self) -> None:
        # 23 hours left across a month boundary still counts as near expiry.
        now = 1_706_742_000  # 2024-01-31T23:00:00Z
        payload = {"username": "alice", "exp": now + 23 * 3600}
        assert security.refresh_if_near_expiry(payload, now=now) is not None

    def test_threshold_is_configurable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SESSION_REFRESH_THRESHOLD", "60")
        now = security.now_epoch_s()
        payload = {"username": "alice", "exp": now + 3600}
        assert security.refresh_if_near_expiry(payload, now=now) is None
