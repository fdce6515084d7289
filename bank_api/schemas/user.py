"""
Pydantic schemas for user profiles, updates, and beneficiaries.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, EmailStr

from bank_api.schemas.common import MoneyAmount


class AccountResponse(BaseModel):
    """An account as clients see it. The password hash never leaves."""
    id: int
    username: str
    email: str
    balance: MoneyAmount
    beneficiaries: list[int] = Field(
        validation_alias=AliasChoices("beneficiary_ids", "beneficiaries")
    )

    model_config = {"from_attributes": True}


class AccountUpdate(BaseModel):
    """
    The only fields a user may change on their own account.

    Anything else in the request body is rejected outright.
    """
    model_config = ConfigDict(extra="forbid")

    email: EmailStr | None = None
    beneficiaries: list[int] | None = None


class BeneficiaryAdd(BaseModel):
    beneficiary_id: int


class UserResponse(BaseModel):
    message: str
    user: AccountResponse


class UserListResponse(BaseModel):
    message: str = "Users found"
    users: list[AccountResponse]
    total: int


class BalanceResponse(BaseModel):
    message: str = "Balance retrieved successfully"
    balance: MoneyAmount
