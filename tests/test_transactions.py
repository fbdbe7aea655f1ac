from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from edge_api.core.errors import AlreadyCompleted
from edge_api.db.models import TX_COMPLETED, TX_FAILED
from edge_api.services.transaction_service import TransactionService


def _seed(repo, *, amount=10000, balance=50000, status="pending"):
    repo.create_wallet("U1", "NGN", balance=balance)
    return repo.create_transaction(
        "U1", amount, transaction_id="T1", reference="FLW-T1", status=status, description="Wallet funding"
    )


def test_complete_credits_wallet_and_marks_transaction(client, admin_headers, repo):
    _seed(repo)

    resp = client.post(
        "/complete-pending-transaction",
        json={"transactionId": "T1", "userId": "U1", "adminUserId": "admin@example.com"},
        headers=admin_headers,
    )

    assert resp.status_code == 200, resp.text
    assert resp.json() == {
        "success": True,
        "data": {"transaction_id": "T1", "amount": 10000, "previous_balance": 50000, "new_balance": 60000},
    }
    tx = repo.get_transaction("T1")
    assert tx.status == TX_COMPLETED
    assert tx.completed_by == "admin@example.com"
    wallet = repo.get_wallet("U1", "NGN")
    assert wallet.balance == 60000

    entries = repo.list_ledger_entries(wallet.id)
    assert [(e.transaction_id, e.amount, e.balance_before, e.balance_after) for e in entries] == [
        ("T1", 10000, 50000, 60000)
    ]


def test_complete_by_reference(client, admin_headers, repo):
    _seed(repo)
    resp = client.post(
        "/complete-pending-transaction", json={"reference": "FLW-T1", "userId": "U1"}, headers=admin_headers
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["new_balance"] == 60000


def test_second_completion_is_rejected_and_credits_once(client, admin_headers, repo):
    _seed(repo)
    body = {"transactionId": "T1", "userId": "U1"}

    first = client.post("/complete-pending-transaction", json=body, headers=admin_headers)
    second = client.post("/complete-pending-transaction", json=body, headers=admin_headers)

    assert first.status_code == 200
    assert second.status_code == 409
    assert "error" in second.json()
    assert repo.get_wallet("U1", "NGN").balance == 60000


def test_completed_transaction_is_rejected(client, admin_headers, repo):
    _seed(repo, status=TX_COMPLETED)
    resp = client.post(
        "/complete-pending-transaction", json={"transactionId": "T1", "userId": "U1"}, headers=admin_headers
    )
    assert resp.status_code == 409
    assert repo.get_wallet("U1", "NGN").balance == 50000


def test_failed_transaction_is_rejected(repo, temp_db):
    _seed(repo, status=TX_FAILED)
    with pytest.raises(AlreadyCompleted):
        TransactionService().complete(transaction_id="T1", user_id="U1", admin_id="ops@example.com")


def test_compare_and_set_only_lets_one_completion_through(repo):
    """Both callers saw the transaction pending; only the first flip may credit."""
    _seed(repo)
    wallet = repo.get_wallet("U1", "NGN")

    winner = repo.complete_pending_transaction("T1", wallet.id, actor="a@example.com")
    loser = repo.complete_pending_transaction("T1", wallet.id, actor="b@example.com")

    assert winner is not None
    assert winner.new_balance == 60000
    assert loser is None
    assert repo.get_wallet("U1", "NGN").balance == 60000
    assert len(repo.list_ledger_entries(wallet.id)) == 1


def test_lost_race_surfaces_already_completed(repo, monkeypatch):
    _seed(repo)
    svc = TransactionService(repository=repo)
    real_complete = repo.complete_pending_transaction

    def racing_complete(transaction_id, wallet_id, *, actor):
        # a concurrent request completes the transaction first
        real_complete(transaction_id, wallet_id, actor="other@example.com")
        return real_complete(transaction_id, wallet_id, actor=actor)

    monkeypatch.setattr(repo, "complete_pending_transaction", racing_complete)
    with pytest.raises(AlreadyCompleted):
        svc.complete(transaction_id="T1", user_id="U1", admin_id="ops@example.com")
    assert repo.get_wallet("U1", "NGN").balance == 60000


def test_validation_and_lookup_errors(client, admin_headers, repo):
    _seed(repo)
    url = "/complete-pending-transaction"

    resp = client.post(url, json={"userId": "U1"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "transactionId or reference required"}

    resp = client.post(url, json={"transactionId": "T1"}, headers=admin_headers)
    assert resp.status_code == 400

    resp = client.post(url, json={"transactionId": "missing", "userId": "U1"}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Transaction not found"}

    resp = client.post(url, json={"transactionId": "T1", "userId": "U2"}, headers=admin_headers)
    assert resp.status_code == 400
    assert repo.get_transaction("T1").status == "pending"


def test_missing_wallet_is_not_found(client, admin_headers, repo):
    repo.create_transaction("U9", 500, transaction_id="T9")
    resp = client.post(
        "/complete-pending-transaction", json={"transactionId": "T9", "userId": "U9"}, headers=admin_headers
    )
    assert resp.status_code == 404
    assert resp.json() == {"error": "Wallet not found"}
    assert repo.get_transaction("T9").status == "pending"


def test_admin_user_id_must_match_session(client, admin_headers, repo):
    _seed(repo)
    resp = client.post(
        "/complete-pending-transaction",
        json={"transactionId": "T1", "userId": "U1", "adminUserId": "someone-else"},
        headers=admin_headers,
    )
    assert resp.status_code == 400
    assert repo.get_wallet("U1", "NGN").balance == 50000


@pytest.mark.parametrize(
    "body, message",
    [
        ({"transactionId": "T1", "userId": 1}, "userId must be a string"),
        ({"transactionId": 7, "userId": "U1"}, "transactionId must be a string"),
    ],
)
def test_non_string_ids_are_rejected(client, admin_headers, repo, body, message):
    _seed(repo)
    resp = client.post("/complete-pending-transaction", json=body, headers=admin_headers)

    assert resp.status_code == 400
    assert resp.json() == {"error": message}
    assert resp.headers["access-control-allow-origin"] == "*"
    assert repo.get_transaction("T1").status == "pending"


def test_concurrent_completions_credit_once(repo):
    _seed(repo)
    svc = TransactionService(repository=repo)
    barrier = threading.Barrier(2)

    def attempt(admin_id):
        barrier.wait()
        try:
            svc.complete(transaction_id="T1", user_id="U1", admin_id=admin_id)
            return "ok"
        except AlreadyCompleted:
            return "AlreadyCompleted"

    with ThreadPoolExecutor(max_workers=2) as pool:
        outcomes = list(pool.map(attempt, ["a@example.com", "b@example.com"]))

    assert sorted(outcomes) == ["AlreadyCompleted", "ok"]
    wallet = repo.get_wallet("U1", "NGN")
    assert wallet.balance == 60000
    assert len(repo.list_ledger_entries(wallet.id)) == 1
