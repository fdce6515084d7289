"""
Auth service: registration, login and tokens.

Tokens are HS256 JWTs carrying the account id as ``sub`` and
the username. They are verified without touching the database.
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from bank_api.config import get_settings
from bank_api.exceptions import AuthenticationError, InvalidRequest
from bank_api.models.account import Account
from bank_api.repositories.account_store import AccountStore
from bank_api.schemas.auth import RegisterRequest, LoginRequest

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def create_token(account: Account) -> str:
    settings = get_settings()
    expires = datetime.now(timezone.utc) + timedelta(
        minutes=settings.JWT_EXPIRE_MINUTES
    )
    payload = {
        "sub": str(account.id),
        "username": account.username,
        "exp": expires,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    """
    Decode and check a token.

    Raises AuthenticationError if the signature is wrong, the
    token expired, or the payload is missing the caller id.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise AuthenticationError("Invalid token") from None

    if not payload.get("sub") or not payload.get("username"):
        raise AuthenticationError("Invalid token")
    return payload


class AuthService:

    def __init__(self, db: Session):
        self.db = db
        self.accounts = AccountStore(db)

    def register(self, request: RegisterRequest) -> Account:
        """
        Create a new account with the configured starting balance.

        Username and email must both be unused.
        """
        if self.accounts.find_by_username(request.username):
            raise InvalidRequest("User with this username already exists")

        if self.accounts.find_by_email(request.email):
            raise InvalidRequest("User with this email already exists")

        account = self.accounts.create(
            username=request.username,
            password_hash=hash_password(request.password),
            email=request.email,
            initial_balance=get_settings().INITIAL_BALANCE,
        )
        logger.info("Registered account %s (%s)", account.id, account.username)
        return account

    def login(self, request: LoginRequest) -> tuple[str, Account]:
        """Check credentials and return a fresh token with the account."""
        account = self.accounts.find_by_username(request.username)
        if not account or not verify_password(request.password, account.password_hash):
            logger.warning("Failed login for username %r", request.username)
            raise AuthenticationError("Invalid credentials")

        return create_token(account), account
