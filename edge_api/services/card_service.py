"""
Virtual card freeze/unfreeze use cases.
"""

from __future__ import annotations

import logging

from edge_api.core.errors import ValidationError
from edge_api.repositories.sql_repository import SQLRepository
from edge_api.services.card_provider import CardActionReceipt, get_card_provider
from edge_api.services.store import writing

logger = logging.getLogger(__name__)


class CardService:
    def __init__(self, repository: SQLRepository | None = None, provider_factory=get_card_provider) -> None:
        self.repository = repository or SQLRepository()
        self._provider_factory = provider_factory

    def set_frozen(self, card_id, frozen: bool, *, actor: str | None = None) -> CardActionReceipt:
        card_id = str(card_id).strip() if card_id is not None else ""
        if not card_id:
            raise ValidationError("Missing cardId")
        provider = self._provider_factory()
        receipt = provider.set_frozen(card_id, frozen)
        with writing("audit log"):
            self.repository.record_audit(
                f"card_{receipt.action}",
                table_name="virtual_cards",
                record_id=card_id,
                user_id=actor,
                new_data={"simulated": receipt.simulated},
            )
        logger.info("Card %s %s requested by %s", card_id, receipt.action, actor)
        return receipt
