"""Support ticket listing and resolution."""

from __future__ import annotations

import logging

from edge_api.core.errors import NotFound, ValidationError
from edge_api.db.models import SupportTicket
from edge_api.repositories.sql_repository import SQLRepository
from edge_api.services.store import reading, writing

logger = logging.getLogger(__name__)


def ticket_to_dict(ticket: SupportTicket) -> dict:
    return {
        "id": ticket.id,
        "user_id": ticket.user_id,
        "subject": ticket.subject,
        "message": ticket.message,
        "status": ticket.status,
        "created_at": ticket.created_at.isoformat() if ticket.created_at else None,
        "resolved_at": ticket.resolved_at.isoformat() if ticket.resolved_at else None,
    }


class SupportService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def list_tickets(self) -> list[dict]:
        """Most recent first."""
        with reading("support tickets"):
            tickets = self.repository.list_support_tickets()
        return [ticket_to_dict(t) for t in tickets]

    def resolve(self, ticket_id, *, actor: str | None = None) -> bool:
        ticket_id = str(ticket_id).strip() if ticket_id is not None else ""
        if not ticket_id:
            raise ValidationError("Missing ticket id")
        with reading("support ticket"):
            ticket = self.repository.get_support_ticket(ticket_id)
        if ticket is None:
            raise NotFound("Ticket not found")
        with writing("support ticket"):
            changed = self.repository.resolve_support_ticket(ticket_id, actor=actor)
        if changed:
            logger.info("Ticket %s resolved by %s", ticket_id, actor)
        return changed
