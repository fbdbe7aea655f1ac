from fastapi import APIRouter, Depends

from edge_api.core.errors import ValidationError
from edge_api.routers.deps import require_admin
from edge_api.services.transaction_service import TransactionService

router = APIRouter(tags=["transactions"])
_service = TransactionService()


@router.post("/complete-pending-transaction")
def complete_pending_transaction(payload: dict, admin: str = Depends(require_admin)):
    claimed = payload.get("adminUserId")
    if claimed and claimed != admin:
        raise ValidationError("adminUserId does not match the authenticated admin")
    credit = _service.complete(
        transaction_id=payload.get("transactionId"),
        reference=payload.get("reference"),
        user_id=payload.get("userId"),
        admin_id=admin,
    )
    return {
        "success": True,
        "data": {
            "transaction_id": credit.transaction_id,
            "amount": credit.amount,
            "previous_balance": credit.previous_balance,
            "new_balance": credit.new_balance,
        },
    }
