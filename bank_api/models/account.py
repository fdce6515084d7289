"""
Account model.

An account is both the login identity and the money holder.
The balance is stored on the row and only ever changed by the
transfer service.

Beneficiaries are a directed relation: A listing B lets A send
B any amount, but says nothing about B sending to A.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Numeric, String, Table,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bank_api.models.base import Base, utcnow


beneficiary_links = Table(
    "beneficiary_links",
    Base.metadata,
    Column("owner_id", ForeignKey("accounts.id"), primary_key=True),
    Column("beneficiary_id", ForeignKey("accounts.id"), primary_key=True),
    CheckConstraint(
        "owner_id <> beneficiary_id", name="ck_beneficiary_not_self"
    ),
)


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    username: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    balance: Mapped[Decimal] = mapped_column(
        Numeric(19, 2), nullable=False, default=Decimal("0.00")
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    beneficiaries: Mapped[list["Account"]] = relationship(
        secondary=beneficiary_links,
        primaryjoin=lambda: Account.id == beneficiary_links.c.owner_id,
        secondaryjoin=lambda: Account.id == beneficiary_links.c.beneficiary_id,
        order_by=lambda: Account.id,
    )

    @property
    def beneficiary_ids(self) -> list[int]:
        return [b.id for b in self.beneficiaries]

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.username} ({self.balance})>"
