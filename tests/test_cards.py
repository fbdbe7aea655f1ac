from __future__ import annotations

import pytest

from edge_api.core import config as core_config
from edge_api.core.errors import ConfigurationError
from edge_api.services import card_provider


@pytest.mark.parametrize("path", ["/freeze-virtual-card", "/unfreeze-virtual-card"])
def test_card_action_without_credentials_is_configuration_error(client, admin_headers, repo, path):
    resp = client.post(path, json={"cardId": "card_123"}, headers=admin_headers)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Card provider credentials not configured"}
    assert not [log for log in repo.list_audit_logs() if log.action.startswith("card_")]


def test_freeze_and_unfreeze_with_demo_provider(client, admin_headers, repo, card_credentials):
    resp = client.post("/freeze-virtual-card", json={"cardId": "card_123"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "cardId": "card_123", "action": "freeze", "simulated": True}

    resp = client.post("/unfreeze-virtual-card", json={"cardId": "card_123"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["action"] == "unfreeze"

    actions = [(log.action, log.record_id) for log in repo.list_audit_logs()]
    assert ("card_freeze", "card_123") in actions
    assert ("card_unfreeze", "card_123") in actions


def test_freeze_requires_card_id(client, admin_headers, card_credentials):
    resp = client.post("/freeze-virtual-card", json={}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing cardId"}


def test_unknown_provider_mode(monkeypatch, card_credentials):
    monkeypatch.setenv("CARD_PROVIDER_MODE", "reloadly")
    core_config.get_settings.cache_clear()
    with pytest.raises(ConfigurationError):
        card_provider.get_card_provider()
