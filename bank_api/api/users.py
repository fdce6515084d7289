"""
User profile, balance, and beneficiary endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bank_api.api.deps import get_current_user, require_admin
from bank_api.exceptions import BankingError, Forbidden
from bank_api.models.base import get_db
from bank_api.services.user_service import UserService
from bank_api.schemas.auth import TokenUser
from bank_api.schemas.user import (
    AccountResponse,
    AccountUpdate,
    BalanceResponse,
    BeneficiaryAdd,
    UserListResponse,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
def list_users(
    admin: TokenUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """List every account. Administrators only."""
    users = [
        AccountResponse.model_validate(a)
        for a in UserService(db).get_all_users()
    ]
    return UserListResponse(users=users, total=len(users))


@router.get("/me", response_model=UserResponse)
def get_my_profile(
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    account = UserService(db).get_user(user.user_id)
    return UserResponse(
        message="User profile", user=AccountResponse.model_validate(account)
    )


@router.get("/balance", response_model=BalanceResponse)
def get_balance(
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return BalanceResponse(balance=UserService(db).get_balance(user.user_id))


@router.post("/beneficiaries", response_model=UserResponse)
def add_beneficiary(
    request: BeneficiaryAdd,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Allow unlimited transfers to another account."""
    service = UserService(db)
    try:
        account = service.add_beneficiary(user.user_id, request.beneficiary_id)
        db.commit()
    except BankingError:
        db.rollback()
        raise
    return UserResponse(
        message="Beneficiary added successfully",
        user=AccountResponse.model_validate(account),
    )


@router.delete("/beneficiaries/{beneficiary_id}", response_model=UserResponse)
def remove_beneficiary(
    beneficiary_id: int,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        account = service.remove_beneficiary(user.user_id, beneficiary_id)
        db.commit()
    except BankingError:
        db.rollback()
        raise
    return UserResponse(
        message="Beneficiary removed successfully",
        user=AccountResponse.model_validate(account),
    )


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    account = UserService(db).get_user(user_id)
    return UserResponse(
        message="User found", user=AccountResponse.model_validate(account)
    )


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    request: AccountUpdate,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Update email and/or the beneficiary list.

    Users may only update their own account.
    """
    if user.user_id != user_id:
        raise Forbidden("Access denied. You can only update your own profile")

    service = UserService(db)
    try:
        account = service.update_user(user_id, request)
        db.commit()
    except BankingError:
        db.rollback()
        raise
    return UserResponse(
        message="User updated successfully",
        user=AccountResponse.model_validate(account),
    )
