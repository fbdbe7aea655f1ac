from fastapi import APIRouter, Depends

from edge_api.routers.deps import require_admin
from edge_api.services.card_service import CardService

router = APIRouter(tags=["cards"])
_service = CardService()


def _result(receipt) -> dict:
    return {
        "success": True,
        "cardId": receipt.card_id,
        "action": receipt.action,
        "simulated": receipt.simulated,
    }


@router.post("/freeze-virtual-card")
def freeze_card(payload: dict, admin: str = Depends(require_admin)):
    return _result(_service.set_frozen(payload.get("cardId"), True, actor=admin))


@router.post("/unfreeze-virtual-card")
def unfreeze_card(payload: dict, admin: str = Depends(require_admin)):
    return _result(_service.set_frozen(payload.get("cardId"), False, actor=admin))
