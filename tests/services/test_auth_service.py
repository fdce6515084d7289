"""
Tests for registration, login, and token handling.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from jose import jwt

from bank_api.config import get_settings
from bank_api.exceptions import AuthenticationError, InvalidRequest
from bank_api.schemas.auth import LoginRequest, RegisterRequest
from bank_api.services.auth_service import (
    AuthService,
    create_token,
    hash_password,
    verify_password,
    verify_token,
)


def register(service, username="alice", email="alice@example.com", password="secret1"):
    return service.register(RegisterRequest(
        username=username, password=password, email=email,
    ))


class TestRegister:

    def test_register_creates_account(self, db_session):
        account = register(AuthService(db_session))
        db_session.commit()

        assert account.id == 1
        assert account.username == "alice"
        assert account.balance == get_settings().INITIAL_BALANCE
        assert account.beneficiary_ids == []

    def test_password_is_hashed(self, db_session):
        account = register(AuthService(db_session))
        assert account.password_hash != "secret1"
        assert verify_password("secret1", account.password_hash)

    def test_duplicate_username(self, db_session):
        service = AuthService(db_session)
        register(service)
        with pytest.raises(InvalidRequest, match="username already exists"):
            register(service, email="other@example.com")

    def test_duplicate_email(self, db_session):
        service = AuthService(db_session)
        register(service)
        with pytest.raises(InvalidRequest, match="email already exists"):
            register(service, username="alice2")


class TestLogin:

    def test_login_returns_token(self, db_session):
        service = AuthService(db_session)
        register(service)
        db_session.commit()

        token, account = service.login(LoginRequest(username="alice", password="secret1"))

        assert account.username == "alice"
        payload = verify_token(token)
        assert payload["sub"] == str(account.id)
        assert payload["username"] == "alice"

    def test_wrong_password(self, db_session):
        service = AuthService(db_session)
        register(service)
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            service.login(LoginRequest(username="alice", password="wrong!"))

    def test_unknown_user(self, db_session):
        with pytest.raises(AuthenticationError, match="Invalid credentials"):
            AuthService(db_session).login(LoginRequest(username="ghost", password="x"))


class TestTokens:

    def test_round_trip(self, db_session):
        account = register(AuthService(db_session))
        assert verify_token(create_token(account))["username"] == "alice"

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError, match="Invalid token"):
            verify_token("not-a-token")

    def test_wrong_secret(self):
        token = jwt.encode({"sub": "1", "username": "x"}, "other", algorithm="HS256")
        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_expired_token(self):
        settings = get_settings()
        token = jwt.encode(
            {
                "sub": "1",
                "username": "x",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_token_without_identity(self):
        settings = get_settings()
        token = jwt.encode({"foo": "bar"}, settings.JWT_SECRET,
                           algorithm=settings.JWT_ALGORITHM)
        with pytest.raises(AuthenticationError):
            verify_token(token)


def test_hash_password_is_salted():
    assert hash_password("same") != hash_password("same")


def test_initial_balance_is_decimal():
    assert isinstance(get_settings().INITIAL_BALANCE, Decimal)
