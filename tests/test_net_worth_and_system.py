from __future__ import annotations


def test_net_worth_totals_per_currency(client, admin_headers, repo):
    repo.add_asset("U1", "real_estate", "Flat", "1500.00", "NGN")
    repo.add_asset("U1", "crypto", "BTC", "250.50", "USD")
    repo.add_liability("U1", "loan", "Car loan", "400.00", "NGN")
    repo.add_asset("U2", "stock", "Other user", "99.00", "NGN")

    resp = client.get("/admin-net-worth", params={"userId": "U1"}, headers=admin_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert [a["name"] for a in body["assets"]] == ["Flat", "BTC"]
    assert [l["name"] for l in body["liabilities"]] == ["Car loan"]
    assert body["totals"] == {
        "NGN": {"assets": "1500.00", "liabilities": "400.00", "net": "1100.00"},
        "USD": {"assets": "250.50", "liabilities": "0", "net": "250.50"},
    }


def test_net_worth_requires_user(client, admin_headers):
    resp = client.get("/admin-net-worth", headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "userId required"}


def test_system_overview_uses_settings_and_audit_log(client, admin_headers, repo):
    client.post("/admin-settings", json={"last_backup": "2024-07-01 02:00"}, headers=admin_headers)
    ticket = repo.create_support_ticket("U1", "Help", "...")
    client.post("/admin-support", json={"id": ticket.id}, headers=admin_headers)

    resp = client.get("/admin-system-tools", headers=admin_headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == {"uptime": "99.98%", "lastBackup": "2024-07-01 02:00", "cacheStatus": "Healthy"}
    messages = [log["message"] for log in body["logs"]]
    assert f"[ticket_resolve] support_tickets ID: {ticket.id}" in messages
    assert "[settings_update] platform_settings" in messages


def test_system_actions(client, admin_headers, repo):
    resp = client.post("/admin-system-tools", json={"action": "clear_cache"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "message": "clear_cache triggered"}
    assert repo.list_audit_logs(limit=1)[0].action == "system_clear_cache"

    resp = client.post("/admin-system-tools", json={"action": "drop_tables"}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Unknown action"}
