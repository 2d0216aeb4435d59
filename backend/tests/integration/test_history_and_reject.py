"""GET /sites/<site_id>/edit-natural (History) and POST .../edits/<edit_id>/reject"""

import pytest

from siteedit.extensions import db
from siteedit.models.audit_log import AuditLog
from siteedit.models.edit_record import EditRecord
from siteedit.models.page import Page

HEADLINE = {"type": "update", "sectionIndex": 0, "path": "props.headline", "value": "Hot rolls"}


def _url(site):
    return f"/api/v1/sites/{site.id}/edit-natural"


def _propose(client, site, headers, interpreter):
    interpreter.will_return([HEADLINE])
    return client.post(_url(site), json={"request": "New headline"}, headers=headers).get_json()["editId"]


def test_history_newest_first_with_pagination(client, site, homepage, owner_headers, interpreter):
    ids = [_propose(client, site, owner_headers, interpreter) for _ in range(3)]

    resp = client.get(_url(site) + "?limit=2", headers=owner_headers)
    data = resp.get_json()

    assert resp.status_code == 200
    assert data["pagination"] == {"total": 3, "limit": 2, "offset": 0, "hasMore": True}
    assert len(data["edits"]) == 2
    assert {e["id"] for e in data["edits"]} <= set(ids)
    assert "original_content" not in data["edits"][0]

    resp = client.get(_url(site) + "?limit=2&offset=2", headers=owner_headers)
    assert resp.get_json()["pagination"]["hasMore"] is False
    assert len(resp.get_json()["edits"]) == 1


def test_history_limit_is_capped(client, app, site, homepage, owner_headers):
    resp = client.get(_url(site) + "?limit=5000", headers=owner_headers)
    assert resp.get_json()["pagination"]["limit"] == app.config["HISTORY_MAX_LIMIT"]


def test_history_status_filter(client, site, homepage, owner_headers, interpreter):
    pending_id = _propose(client, site, owner_headers, interpreter)
    client.put(_url(site), json={"pageId": homepage.id, "operations": [HEADLINE]}, headers=owner_headers)

    data = client.get(_url(site) + "?status=pending", headers=owner_headers).get_json()
    assert [e["id"] for e in data["edits"]] == [pending_id]

    data = client.get(_url(site) + "?status=applied", headers=owner_headers).get_json()
    assert data["pagination"]["total"] == 1


def test_history_rejects_unknown_status(client, site, homepage, owner_headers):
    resp = client.get(_url(site) + "?status=deleted", headers=owner_headers)
    assert resp.status_code == 400


def test_magic_link_sees_only_its_own_edits(client, site, homepage, owner_headers, interpreter, make_link, link_headers):
    _propose(client, site, owner_headers, interpreter)
    _, token_a = make_link(name="A")
    _, token_b = make_link(name="B")
    own_id = _propose(client, site, link_headers(token_a), interpreter)
    _propose(client, site, link_headers(token_b), interpreter)

    data = client.get(_url(site), headers=link_headers(token_a)).get_json()
    assert [e["id"] for e in data["edits"]] == [own_id]

    data = client.get(_url(site), headers=owner_headers).get_json()
    assert data["pagination"]["total"] == 3


def test_owner_rejects_pending_edit(client, site, homepage, owner, owner_headers, interpreter):
    edit_id = _propose(client, site, owner_headers, interpreter)

    resp = client.post(
        f"/api/v1/sites/{site.id}/edits/{edit_id}/reject",
        json={"reason": "Not on brand"},
        headers=owner_headers,
    )
    data = resp.get_json()

    assert resp.status_code == 200
    assert data["status"] == "rejected"
    assert data["rejection_reason"] == "Not on brand"
    assert data["rejected_by"] == owner.id
    assert data["rejected_at"] is not None
    assert db.session.get(Page, homepage.id).version == 1
    assert AuditLog.query.filter_by(action="edit.reject", entity_id=edit_id).count() == 1


def test_reject_without_body(client, site, homepage, owner_headers, interpreter):
    edit_id = _propose(client, site, owner_headers, interpreter)
    resp = client.post(f"/api/v1/sites/{site.id}/edits/{edit_id}/reject", headers=owner_headers)
    assert resp.status_code == 200
    assert resp.get_json()["rejection_reason"] is None


def test_rejected_edit_cannot_be_applied_or_rejected_again(client, site, homepage, owner_headers, interpreter):
    edit_id = _propose(client, site, owner_headers, interpreter)
    reject_url = f"/api/v1/sites/{site.id}/edits/{edit_id}/reject"
    client.post(reject_url, json={}, headers=owner_headers)

    assert client.post(reject_url, json={}, headers=owner_headers).status_code == 409

    resp = client.put(_url(site), json={
        "pageId": homepage.id, "operations": [HEADLINE], "editId": edit_id,
    }, headers=owner_headers)
    assert resp.status_code == 409
    assert db.session.get(EditRecord, edit_id).status == "rejected"


def test_magic_link_cannot_reject(client, site, homepage, interpreter, make_link, link_headers):
    _, token = make_link()
    edit_id = _propose(client, site, link_headers(token), interpreter)

    resp = client.post(f"/api/v1/sites/{site.id}/edits/{edit_id}/reject", json={}, headers=link_headers(token))
    assert resp.status_code == 403
    assert db.session.get(EditRecord, edit_id).status == "pending"


def test_reject_unknown_edit(client, site, homepage, owner_headers):
    resp = client.post(f"/api/v1/sites/{site.id}/edits/missing/reject", json={}, headers=owner_headers)
    assert resp.status_code == 404


def test_terminal_records_refuse_updates(client, site, homepage, owner_headers):
    resp = client.put(_url(site), json={"pageId": homepage.id, "operations": [HEADLINE]}, headers=owner_headers)
    record = db.session.get(EditRecord, resp.get_json()["editId"])

    record.summary = "rewritten history"
    with pytest.raises(RuntimeError):
        db.session.commit()
    db.session.rollback()

    assert db.session.get(EditRecord, record.id).summary is None
