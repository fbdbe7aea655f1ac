"""Manual completion of pending wallet-funding transactions."""

from __future__ import annotations

import logging

from edge_api.core.errors import AlreadyCompleted, NotFound, ValidationError
from edge_api.db.models import TX_PENDING
from edge_api.repositories.sql_repository import Credit, SQLRepository
from edge_api.services.store import reading, writing

logger = logging.getLogger(__name__)


def _text(value, field: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value.strip()


class TransactionService:
    """Credits a user's wallet with the amount of a pending transaction."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def _find(self, transaction_id: str | None, reference: str | None):
        with reading("transaction"):
            if transaction_id:
                return self.repository.get_transaction(transaction_id)
            return self.repository.get_transaction_by_reference(reference)

    def complete(
        self,
        *,
        transaction_id: str | None,
        user_id: str | None,
        admin_id: str,
        reference: str | None = None,
    ) -> Credit:
        transaction_id = _text(transaction_id, "transactionId") or None
        reference = _text(reference, "reference") or None
        user_id = _text(user_id, "userId")
        if not transaction_id and not reference:
            raise ValidationError("transactionId or reference required")
        if not user_id:
            raise ValidationError("userId required")

        tx = self._find(transaction_id, reference)
        if tx is None:
            raise NotFound("Transaction not found")
        if tx.user_id != user_id:
            raise ValidationError("Transaction does not belong to user")
        if tx.status != TX_PENDING:
            raise AlreadyCompleted(f"Transaction is {tx.status}, not pending")

        with reading("wallet"):
            wallet = self.repository.get_wallet(tx.user_id, tx.currency)
        if wallet is None:
            raise NotFound("Wallet not found")

        with writing("transaction"):
            credit = self.repository.complete_pending_transaction(tx.id, wallet.id, actor=admin_id)
        if credit is None:
            # lost the compare-and-set to a concurrent completion
            raise AlreadyCompleted("Transaction already completed")
        logger.info(
            "Transaction %s completed by %s: %s credited, balance %s -> %s",
            credit.transaction_id,
            admin_id,
            credit.amount,
            credit.previous_balance,
            credit.new_balance,
        )
        return credit
