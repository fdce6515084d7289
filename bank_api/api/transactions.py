"""
Transfer and statement endpoints.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bank_api.api.deps import get_current_user, require_admin
from bank_api.exceptions import BankingError
from bank_api.models.base import get_db
from bank_api.services.transfer_service import TransferService
from bank_api.services.statement_service import (
    DEFAULT_STATEMENT_LIMIT,
    StatementService,
)
from bank_api.schemas.auth import TokenUser
from bank_api.schemas.transaction import (
    TransferRequest,
    TransferResponse,
    TransactionResponse,
    StatementEntryResponse,
    StatementResponse,
    StatementUser,
    StatsResponse,
    TransactionDetailResponse,
    TransactionListResponse,
    TransactionStatistics,
)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("/transfer", response_model=TransferResponse, status_code=201)
def transfer(
    request: TransferRequest,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Send money from the caller to another account. The service commits."""
    service = TransferService(db)
    try:
        result = service.execute_transfer(
            sender_id=user.user_id,
            beneficiary_id=request.beneficiary_id,
            amount=request.amount,
            description=request.description,
        )
    except BankingError:
        db.rollback()
        raise

    return TransferResponse(
        transaction=TransactionResponse.model_validate(result.transaction),
        previous_sender_balance=result.previous_sender_balance,
        new_sender_balance=result.new_sender_balance,
        previous_beneficiary_balance=result.previous_beneficiary_balance,
        new_beneficiary_balance=result.new_beneficiary_balance,
    )


@router.get("/statement", response_model=StatementResponse)
def get_statement(
    limit: int = Query(default=DEFAULT_STATEMENT_LIMIT, ge=1, le=100),
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's latest transactions, newest first."""
    statement = StatementService(db).statement_for(user.user_id, limit)
    return StatementResponse.model_validate(statement)


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Totals sent and received by the caller."""
    stats = StatementService(db).stats_for(user.user_id)
    return StatsResponse(
        user=StatementUser.model_validate(stats.user),
        statistics=TransactionStatistics.model_validate(stats),
    )


@router.get("/all", response_model=TransactionListResponse)
def get_all_transactions(
    admin: TokenUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Every ledger entry. Administrators only."""
    transactions = [
        StatementEntryResponse.model_validate(t)
        for t in StatementService(db).all_transactions()
    ]
    return TransactionListResponse(
        transactions=transactions, total=len(transactions)
    )


@router.get("/{transaction_id}", response_model=TransactionDetailResponse)
def get_transaction(
    transaction_id: int,
    user: TokenUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """One transaction the caller sent or received."""
    entry = StatementService(db).transaction_by_id(transaction_id, user.user_id)
    return TransactionDetailResponse(
        transaction=StatementEntryResponse.model_validate(entry)
    )
