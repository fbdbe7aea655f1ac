"""Read-only net worth summary built from user assets and liabilities."""

from __future__ import annotations

from decimal import Decimal

from edge_api.core.errors import ValidationError
from edge_api.repositories.sql_repository import SQLRepository
from edge_api.services.store import reading


def _record_to_dict(record) -> dict:
    return {
        "id": record.id,
        "user_id": record.user_id,
        "type": record.type,
        "name": record.name,
        "value": str(record.value),
        "currency": record.currency,
        "created_at": record.created_at.isoformat() if record.created_at else None,
    }


class NetWorthService:
    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def summary(self, user_id: str | None) -> dict:
        user_id = (user_id or "").strip()
        if not user_id:
            raise ValidationError("userId required")
        with reading("net worth"):
            assets = self.repository.list_assets(user_id)
            liabilities = self.repository.list_liabilities(user_id)

        # amounts in different currencies are never summed together
        totals: dict[str, dict[str, Decimal]] = {}
        for record, bucket in [(item, "assets") for item in assets] + [(item, "liabilities") for item in liabilities]:
            entry = totals.setdefault(record.currency, {"assets": Decimal("0"), "liabilities": Decimal("0")})
            entry[bucket] += Decimal(record.value)

        return {
            "assets": [_record_to_dict(item) for item in assets],
            "liabilities": [_record_to_dict(item) for item in liabilities],
            "totals": {
                currency: {
                    "assets": str(entry["assets"]),
                    "liabilities": str(entry["liabilities"]),
                    "net": str(entry["assets"] - entry["liabilities"]),
                }
                for currency, entry in sorted(totals.items())
            },
        }
