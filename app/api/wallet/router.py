"""
Wallet API routes: balance, transaction history and new payments
"""

from fastapi import APIRouter, Depends, status
import logging

from app.api.dependencies import get_current_user_id
from app.core.state import AppState, get_state
from app.core.websocket import REFRESH_BALANCE, REFRESH_WALLET
from .schemas import (
    TransactionCreate,
    BalanceResponse,
    WalletResponse,
    TransactionCreatedResponse
)

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/balance", response_model=BalanceResponse)
async def get_balance(
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    """Current rewards balance"""
    balance = state.ledger.get_balance(user_id)
    logger.debug(f"Balance requested for {user_id}: {balance}")
    return BalanceResponse(balance=balance)

@router.get("/wallet", response_model=WalletResponse)
async def get_wallet(
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    """All transactions, most recent first"""
    transactions = state.ledger.list_transactions(user_id)
    return WalletResponse(transactions=[t.to_response() for t in transactions])

@router.post(
    "/transactions",
    response_model=TransactionCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record a payment",
    description="Store a payment and credit 5% of its amount as cashback"
)
async def create_transaction(
    request: TransactionCreate,
    user_id: str = Depends(get_current_user_id),
    state: AppState = Depends(get_state)
):
    transaction = state.ledger.record_transaction(
        user_id,
        amount=request.amount,
        description=request.description,
        type=request.type or "payment",
        date=request.date,
        merchant=request.merchant
    )

    state.broadcaster.publish(REFRESH_WALLET, {"userId": user_id})
    state.broadcaster.publish(REFRESH_BALANCE, {"userId": user_id})

    return TransactionCreatedResponse(transaction=transaction.to_response())
