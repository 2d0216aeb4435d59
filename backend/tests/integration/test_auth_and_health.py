"""Owner login and service health"""


def test_login_issues_working_token(client, owner, site, homepage):
    resp = client.post("/api/v1/auth/login", json={"email": "owner@acme.test", "password": "correct horse"})
    assert resp.status_code == 200
    token = resp.get_json()["access_token"]

    resp = client.get(
        f"/api/v1/sites/{site.id}/edit-natural",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 200


def test_login_wrong_password(client, owner):
    resp = client.post("/api/v1/auth/login", json={"email": "owner@acme.test", "password": "nope"})
    assert resp.status_code == 401


def test_login_requires_body(client):
    assert client.post("/api/v1/auth/login").status_code == 400


def test_health(client, interpreter):
    data = client.get("/api/v1/health").get_json()
    assert data["status"] == "ok"
    assert data["interpreter"] == "available"


def test_health_reports_unconfigured_interpreter(client):
    """Testing config has no GROQ_API_KEY."""
    assert client.get("/api/v1/health").get_json()["interpreter"] == "unconfigured"


def test_openapi_document_served(client):
    resp = client.get("/openapi/edits.yaml")
    assert resp.status_code == 200
    assert b"/sites/{site_id}/edit-natural" in resp.data
