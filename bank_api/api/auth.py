"""
Registration and login endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bank_api.api.deps import get_current_user
from bank_api.exceptions import BankingError
from bank_api.models.base import get_db
from bank_api.services.auth_service import AuthService
from bank_api.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse,
    TokenUser,
    VerifyResponse,
)
from bank_api.schemas.user import AccountResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
):
    """Create an account with the starting balance."""
    service = AuthService(db)
    try:
        account = service.register(request)
        db.commit()
    except BankingError:
        db.rollback()
        raise
    return RegisterResponse(user=AccountResponse.model_validate(account))


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
):
    """Exchange username and password for a bearer token."""
    service = AuthService(db)
    token, account = service.login(request)
    return LoginResponse(token=token, user=AccountResponse.model_validate(account))


@router.get("/verify", response_model=VerifyResponse)
def verify(user: TokenUser = Depends(get_current_user)):
    """Report the identity behind a valid token."""
    return VerifyResponse(user=user)
