"""
Shared pytest fixtures for the slug registry tests.

Every test gets a fresh app bound to an in-memory SQLite database, with
the app context pushed for the whole test.
"""

import pytest
from flask_jwt_extended import create_access_token

from slugregistry import create_app
from slugregistry.application.slugs.fields import SlugFieldDefinition
from slugregistry.extensions import db
from slugregistry.models.data_object import DataObject
from slugregistry.models.site import Site


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def registry(app):
    registry = app.extensions["slug_registry"]
    registry.register_field(
        SlugFieldDefinition(class_id="product", name="slug", action="product_detail")
    )
    registry.register_field(
        SlugFieldDefinition(class_id="product", name="altSlug", action="product_alt")
    )
    registry.register_field(
        SlugFieldDefinition(class_id="product", name="requiredSlug", mandatory=True)
    )
    registry.register_field(
        SlugFieldDefinition(
            class_id="news",
            name="slug",
            action="news_detail",
            available_sites=frozenset({1, 2}),
        )
    )
    return registry


@pytest.fixture
def make_object(app):
    def _make(class_id="product", key=None):
        obj = DataObject()
        obj.class_id = class_id
        obj.key = key or f"{class_id}-item"
        db.session.add(obj)
        db.session.commit()
        return obj
    return _make


@pytest.fixture
def site(app):
    site = Site()
    site.name = "Shop"
    site.main_domain = "shop.example.com"
    db.session.add(site)
    db.session.commit()
    return site


def _headers(role):
    token = create_access_token(identity="1", additional_claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(app):
    return _headers("admin")


@pytest.fixture
def editor_headers(app):
    return _headers("editor")
