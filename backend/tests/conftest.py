"""Shared fixtures: sample content, a Flask app on in-memory SQLite, a scripted Interpreter."""

import copy

import pytest
from flask_jwt_extended import create_access_token

from siteedit import create_app
from siteedit.extensions import db
from siteedit.domain.document import Document
from siteedit.domain.operations import EditProposal
from siteedit.models.page import Page
from siteedit.models.site import Site
from siteedit.models.user import User
from siteedit.services.interpreter import EXTENSION_KEY

SAMPLE_CONTENT = {
    "siteInfo": {"name": "Acme Bakery"},
    "sections": [
        {
            "id": "hero-1",
            "componentType": "hero-centered",
            "order": 0,
            "props": {
                "headline": "Fresh bread daily",
                "subheadline": "Since 1990",
                "ctaText": "Order now",
                "backgroundColor": "#ffffff",
            },
        },
        {
            "id": "features-1",
            "componentType": "features-grid",
            "order": 1,
            "props": {
                "headline": "Why us",
                "features": [
                    {"title": "Organic", "description": "Local flour"},
                    {"title": "Fast", "description": "Same-day delivery"},
                ],
            },
        },
        {
            "id": "contact-1",
            "componentType": "contact-split",
            "order": 2,
            "props": {"headline": "Visit us", "email": "hi@acme.test"},
        },
    ],
}


class FakeInterpreter:
    """Returns whatever proposal (or raises whatever error) the test scripted."""

    available = True

    def __init__(self):
        self.reply = None
        self.calls = []

    def interpret(self, request, document, site_context=None):
        self.calls.append({"request": request, "document": document, "site_context": site_context})
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply

    def will_return(self, operations=(), risk="low", understood=True, summary="", interpretation=""):
        self.reply = EditProposal.model_validate({
            "understood": understood,
            "interpretation": interpretation or "scripted",
            "operations": list(operations),
            "riskLevel": risk,
            "summary": summary or "scripted change",
        })
        return self.reply


@pytest.fixture(name="content")
def content_fixture():
    """A fresh copy of the sample page content."""
    return copy.deepcopy(SAMPLE_CONTENT)


@pytest.fixture(name="document")
def document_fixture(content):
    return Document.from_dict(content)


@pytest.fixture(name="app")
def app_fixture():
    """App on in-memory SQLite with all tables created."""
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(name="client")
def client_fixture(app):
    return app.test_client()


@pytest.fixture(name="interpreter")
def interpreter_fixture(app):
    fake = FakeInterpreter()
    app.extensions[EXTENSION_KEY] = fake
    return fake


@pytest.fixture(name="owner")
def owner_fixture(app):
    user = User(email="owner@acme.test")
    user.set_password("correct horse")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture(name="site")
def site_fixture(owner):
    site = Site(name="Acme Bakery", slug="acme", owner_id=owner.id, settings={"industry": "bakery"})
    db.session.add(site)
    db.session.commit()
    return site


@pytest.fixture(name="homepage")
def homepage_fixture(site):
    page = Page(
        site_id=site.id,
        title="Home",
        slug="home",
        is_homepage=True,
        content=copy.deepcopy(SAMPLE_CONTENT),
        version=1,
    )
    db.session.add(page)
    db.session.commit()
    return page


@pytest.fixture(name="owner_headers")
def owner_headers_fixture(owner):
    token = create_access_token(identity=owner.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(name="make_link")
def make_link_fixture(site, owner):
    """Factory creating a magic link on the site; returns (link, raw token)."""
    from siteedit.application.magic_links.create_magic_link import create_magic_link

    def make(name="Copywriter", permissions=None, expires_in_days=None, now=None):
        return create_magic_link(
            site=site,
            created_by=owner.id,
            name=name,
            expires_in_days=expires_in_days,
            permissions=permissions,
            now=now,
        )

    return make


@pytest.fixture(name="link_headers")
def link_headers_fixture(app):
    def headers(token):
        return {app.config["MAGIC_LINK_HEADER"]: token}
    return headers
