"""
Virtual card provider adapter.

CardProvider is the seam between the freeze/unfreeze handlers and the
card-issuing provider. Only the demo provider ships today: it validates nothing
remotely, logs the action and returns a receipt flagged ``simulated=True`` so
callers can tell it apart from a real state change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from edge_api.core.config import Settings, get_settings
from edge_api.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

CARD_ACTIONS = ("freeze", "unfreeze")


@dataclass(frozen=True)
class CardActionReceipt:
    card_id: str
    action: str
    simulated: bool
    created_at: datetime


class CardProvider(Protocol):
    def set_frozen(self, card_id: str, frozen: bool) -> CardActionReceipt:
        """Freeze or unfreeze a card; raise CardProviderError on failure."""
        ...


class DemoCardProvider:
    """Logs the requested action without calling the issuer."""

    def __init__(self, client_id: str, client_secret: str) -> None:
        self.client_id = client_id
        self._client_secret = client_secret

    def set_frozen(self, card_id: str, frozen: bool) -> CardActionReceipt:
        action = "freeze" if frozen else "unfreeze"
        logger.info("[demo] card %s: %s accepted (no remote call)", card_id, action)
        return CardActionReceipt(
            card_id=card_id,
            action=action,
            simulated=True,
            created_at=datetime.now(timezone.utc),
        )


def get_card_provider(settings: Settings | None = None) -> CardProvider:
    settings = settings or get_settings()
    if not settings.card_provider_configured:
        raise ConfigurationError("Card provider credentials not configured")
    if settings.card_provider_mode == "demo":
        return DemoCardProvider(settings.card_provider_client_id, settings.card_provider_client_secret)
    raise ConfigurationError(f"Unknown card provider mode: {settings.card_provider_mode}")
