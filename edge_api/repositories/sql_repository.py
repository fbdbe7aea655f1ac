"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, update, delete

from edge_api.core.security import new_session_token
from edge_api.db.models import (
    AdminSession,
    AdminUser,
    AuditLog,
    FeatureFlag,
    LedgerEntry,
    PlatformSetting,
    SupportTicket,
    Transaction,
    UserAsset,
    UserLiability,
    Wallet,
    TICKET_OPEN,
    TICKET_RESOLVED,
    TX_COMPLETED,
    TX_PENDING,
)
from edge_api.db.session import get_session


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Credit:
    transaction_id: str
    amount: int
    previous_balance: int
    new_balance: int


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- settings --------------------------
    def list_settings(self) -> list[PlatformSetting]:
        with get_session() as session:
            return session.execute(select(PlatformSetting)).scalars().all()

    def upsert_settings(self, values: dict, *, actor: str | None = None) -> list[str]:
        """Write every key in one transaction; either all keys change or none do."""
        now = _now()
        with get_session() as session:
            try:
                previous = {}
                for key, value in values.items():
                    row = session.get(PlatformSetting, key)
                    if row is None:
                        session.add(PlatformSetting(key=key, value=value, updated_at=now))
                    else:
                        previous[key] = row.value
                        row.value = value
                        row.updated_at = now
                session.add(
                    AuditLog(
                        action="settings_update",
                        table_name="platform_settings",
                        user_id=actor,
                        old_data=previous,
                        new_data=dict(values),
                        created_at=now,
                    )
                )
                session.commit()
            except Exception:
                session.rollback()
                raise
        return list(values)

    # -------------------------- feature flags --------------------------
    def list_feature_flags(self) -> list[FeatureFlag]:
        with get_session() as session:
            stmt = select(FeatureFlag).order_by(FeatureFlag.feature_name)
            return session.execute(stmt).scalars().all()

    def upsert_feature_flag(self, feature_name: str, enabled: bool, *, actor: str | None = None) -> FeatureFlag:
        now = _now()
        with get_session() as session:
            stmt = select(FeatureFlag).where(FeatureFlag.feature_name == feature_name)
            flag = session.execute(stmt).scalar_one_or_none()
            old = None
            if flag is None:
                flag = FeatureFlag(feature_name=feature_name, enabled=enabled, updated_by=actor, updated_at=now)
                session.add(flag)
            else:
                old = {"enabled": flag.enabled}
                flag.enabled = enabled
                flag.updated_by = actor
                flag.updated_at = now
            session.flush()
            session.add(
                AuditLog(
                    action="feature_flag_update",
                    table_name="feature_flags",
                    record_id=flag.id,
                    user_id=actor,
                    old_data=old,
                    new_data={"feature_name": feature_name, "enabled": enabled},
                    created_at=now,
                )
            )
            session.commit()
            return flag

    # -------------------------- transactions & wallets --------------------------
    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        with get_session() as session:
            return session.get(Transaction, transaction_id)

    def get_transaction_by_reference(self, reference: str) -> Optional[Transaction]:
        with get_session() as session:
            stmt = select(Transaction).where(Transaction.reference == reference)
            return session.execute(stmt).scalar_one_or_none()

    def create_transaction(
        self,
        user_id: str,
        amount: int,
        *,
        transaction_type: str = "deposit",
        currency: str = "NGN",
        description: str | None = None,
        reference: str | None = None,
        status: str = TX_PENDING,
        transaction_id: str | None = None,
    ) -> Transaction:
        entity = Transaction(
            user_id=user_id,
            amount=int(amount),
            currency=currency,
            transaction_type=transaction_type,
            description=description,
            reference=reference,
            status=status,
            created_at=_now(),
        )
        if transaction_id:
            entity.id = transaction_id
        with get_session() as session:
            session.add(entity)
            session.commit()
            return entity

    def get_wallet(self, user_id: str, currency: str) -> Optional[Wallet]:
        with get_session() as session:
            stmt = select(Wallet).where(Wallet.user_id == user_id, Wallet.currency == currency)
            return session.execute(stmt).scalar_one_or_none()

    def create_wallet(self, user_id: str, currency: str = "NGN", balance: int = 0) -> Wallet:
        now = _now()
        entity = Wallet(user_id=user_id, currency=currency, balance=int(balance), created_at=now, updated_at=now)
        with get_session() as session:
            session.add(entity)
            session.commit()
            return entity

    def list_ledger_entries(self, wallet_id: str) -> list[LedgerEntry]:
        with get_session() as session:
            stmt = select(LedgerEntry).where(LedgerEntry.wallet_id == wallet_id).order_by(LedgerEntry.id)
            return session.execute(stmt).scalars().all()

    def complete_pending_transaction(self, transaction_id: str, wallet_id: str, *, actor: str) -> Optional[Credit]:
        """
        Flip a pending transaction to completed and credit the wallet atomically.

        The status change is a compare-and-set on ``status = pending``; when it
        matches no row (another request won, or the status moved on) nothing is
        written and None is returned.
        """
        now = _now()
        with get_session() as session:
            try:
                flipped = session.execute(
                    update(Transaction)
                    .where(Transaction.id == transaction_id, Transaction.status == TX_PENDING)
                    .values(status=TX_COMPLETED, completed_at=now, completed_by=actor)
                )
                if flipped.rowcount != 1:
                    session.rollback()
                    return None
                tx = session.get(Transaction, transaction_id)
                wallet = session.execute(
                    select(Wallet).where(Wallet.id == wallet_id).with_for_update()
                ).scalar_one()
                before = int(wallet.balance or 0)
                after = before + int(tx.amount)
                wallet.balance = after
                wallet.updated_at = now
                session.add(
                    LedgerEntry(
                        wallet_id=wallet.id,
                        user_id=wallet.user_id,
                        transaction_id=tx.id,
                        amount=int(tx.amount),
                        balance_before=before,
                        balance_after=after,
                        created_by=actor,
                        created_at=now,
                    )
                )
                session.add(
                    AuditLog(
                        action="transaction_complete",
                        table_name="transactions",
                        record_id=tx.id,
                        user_id=actor,
                        old_data={"status": TX_PENDING, "balance": before},
                        new_data={"status": TX_COMPLETED, "balance": after},
                        created_at=now,
                    )
                )
                session.commit()
            except Exception:
                session.rollback()
                raise
            return Credit(transaction_id=tx.id, amount=int(tx.amount), previous_balance=before, new_balance=after)

    # -------------------------- support tickets --------------------------
    def list_support_tickets(self) -> list[SupportTicket]:
        with get_session() as session:
            stmt = select(SupportTicket).order_by(SupportTicket.created_at.desc())
            return session.execute(stmt).scalars().all()

    def get_support_ticket(self, ticket_id: str) -> Optional[SupportTicket]:
        with get_session() as session:
            return session.get(SupportTicket, ticket_id)

    def create_support_ticket(
        self,
        user_id: str,
        subject: str,
        message: str,
        *,
        created_at: datetime | None = None,
    ) -> SupportTicket:
        entity = SupportTicket(
            user_id=user_id,
            subject=subject,
            message=message,
            status=TICKET_OPEN,
            created_at=created_at or _now(),
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            return entity

    def resolve_support_ticket(self, ticket_id: str, *, actor: str | None = None) -> bool:
        """Mark a ticket resolved. Returns False when it already was."""
        now = _now()
        with get_session() as session:
            changed = session.execute(
                update(SupportTicket)
                .where(SupportTicket.id == ticket_id, SupportTicket.status != TICKET_RESOLVED)
                .values(status=TICKET_RESOLVED, resolved_at=now)
            ).rowcount
            if changed:
                session.add(
                    AuditLog(
                        action="ticket_resolve",
                        table_name="support_tickets",
                        record_id=ticket_id,
                        user_id=actor,
                        new_data={"status": TICKET_RESOLVED},
                        created_at=now,
                    )
                )
            session.commit()
            return bool(changed)

    # -------------------------- net worth --------------------------
    def list_assets(self, user_id: str) -> list[UserAsset]:
        with get_session() as session:
            stmt = select(UserAsset).where(UserAsset.user_id == user_id).order_by(UserAsset.created_at)
            return session.execute(stmt).scalars().all()

    def list_liabilities(self, user_id: str) -> list[UserLiability]:
        with get_session() as session:
            stmt = select(UserLiability).where(UserLiability.user_id == user_id).order_by(UserLiability.created_at)
            return session.execute(stmt).scalars().all()

    def add_asset(self, user_id: str, type: str, name: str, value, currency: str) -> UserAsset:
        entity = UserAsset(
            user_id=user_id, type=type, name=name, value=Decimal(str(value)), currency=currency, created_at=_now()
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            return entity

    def add_liability(self, user_id: str, type: str, name: str, value, currency: str) -> UserLiability:
        entity = UserLiability(
            user_id=user_id, type=type, name=name, value=Decimal(str(value)), currency=currency, created_at=_now()
        )
        with get_session() as session:
            session.add(entity)
            session.commit()
            return entity

    # -------------------------- admin users & sessions --------------------------
    def get_admin_user(self, email: str) -> Optional[AdminUser]:
        with get_session() as session:
            return session.get(AdminUser, email)

    def upsert_admin_user(self, email: str, password_hash: str, *, is_active: bool = True) -> AdminUser:
        with get_session() as session:
            user = session.get(AdminUser, email)
            if not user:
                user = AdminUser(email=email, password_hash=password_hash, is_active=is_active, created_at=_now())
                session.add(user)
            else:
                user.password_hash = password_hash
                user.is_active = is_active
            session.commit()
            return user

    def create_admin_session(self, email: str, expires_at: datetime) -> str:
        token = new_session_token()
        entity = AdminSession(token=token, admin_email=email, expires_at=expires_at, created_at=_now())
        with get_session() as session:
            session.add(entity)
            session.commit()
        return token

    def get_admin_session(self, token: str) -> Optional[AdminSession]:
        with get_session() as session:
            return session.get(AdminSession, token)

    def delete_admin_session(self, token: str) -> None:
        with get_session() as session:
            session.execute(delete(AdminSession).where(AdminSession.token == token))
            session.commit()

    # -------------------------- audit log --------------------------
    def record_audit(
        self,
        action: str,
        *,
        table_name: str | None = None,
        record_id: str | None = None,
        user_id: str | None = None,
        new_data: dict | None = None,
    ) -> None:
        entity = AuditLog(
            action=action,
            table_name=table_name,
            record_id=record_id,
            user_id=user_id,
            new_data=new_data,
            created_at=_now(),
        )
        with get_session() as session:
            session.add(entity)
            session.commit()

    def list_audit_logs(self, limit: int = 50) -> list[AuditLog]:
        with get_session() as session:
            stmt = select(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit)
            return session.execute(stmt).scalars().all()
