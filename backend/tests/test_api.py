"""Tests for the v1 HTTP API."""

from slugregistry.domain.owner_context import PlainRecord
from slugregistry.domain.url_slug import SlugValue


def put_slugs(client, headers, object_id, body, field="slug", query=""):
    return client.put(
        f"/api/v1/objects/{object_id}/slugs/{field}{query}",
        json=body,
        headers=headers,
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "ok"


class TestPutSlugs:
    def test_save_and_load(self, client, registry, make_object, admin_headers, site):
        obj_id = make_object().id
        response = put_slugs(client, admin_headers, obj_id, {
            "class_id": "product",
            "slugs": [{"slug": "/shoes/red", "site_id": site.id}, {"slug": "/red"}],
        })
        assert response.status_code == 200

        response = client.get(f"/api/v1/objects/{obj_id}/slugs/slug")
        body = response.get_json()
        assert body["slugs"] == [
            {"slug": "/shoes/red", "site_id": site.id, "action": None, "domain": "shop.example.com"},
            {"slug": "/red", "site_id": 0, "action": None, "domain": None},
        ]

    def test_save_from_csv(self, client, registry, make_object, admin_headers):
        obj_id = make_object().id
        response = put_slugs(client, admin_headers, obj_id, {"class_id": "product", "csv": "/a:1,/b:"})
        assert response.status_code == 200

        response = client.get(f"/api/v1/objects/{obj_id}/slugs/slug?format=csv")
        assert response.mimetype == "text/csv"
        assert response.get_data(as_text=True) == "/a:1,/b:0"

    def test_collection_item_context(self, client, registry, make_object, admin_headers):
        obj_id = make_object().id
        query = "?context=fieldcollection&collection=variants&index=2"
        response = put_slugs(
            client, admin_headers, obj_id, {"class_id": "product", "slugs": [{"slug": "/v2"}]}, query=query
        )
        assert response.status_code == 200

        plain = client.get(f"/api/v1/objects/{obj_id}/slugs/slug").get_json()
        assert plain["slugs"] == []

        item = client.get(f"/api/v1/objects/{obj_id}/slugs/slug{query}").get_json()
        assert [s["slug"] for s in item["slugs"]] == ["/v2"]

    def test_localized_context_requires_locale(self, client, registry, make_object, admin_headers):
        obj_id = make_object().id
        response = put_slugs(
            client, admin_headers, obj_id,
            {"class_id": "product", "slugs": [{"slug": "/x"}]},
            query="?context=localizedfield",
        )
        assert response.status_code == 400

    def test_requires_token(self, client, registry, make_object):
        obj_id = make_object().id
        response = client.put(
            f"/api/v1/objects/{obj_id}/slugs/slug",
            json={"class_id": "product", "slugs": [{"slug": "/a"}]},
        )
        assert response.status_code == 401

    def test_requires_admin(self, client, registry, make_object, editor_headers):
        obj_id = make_object().id
        response = put_slugs(client, editor_headers, obj_id, {"class_id": "product", "slugs": [{"slug": "/a"}]})
        assert response.status_code == 403

    def test_requires_class_id(self, client, registry, make_object, admin_headers):
        obj_id = make_object().id
        response = put_slugs(client, admin_headers, obj_id, {"slugs": [{"slug": "/a"}]})
        assert response.status_code == 400

    def test_unknown_field(self, client, registry, make_object, admin_headers):
        obj_id = make_object().id
        response = put_slugs(
            client, admin_headers, obj_id, {"class_id": "product", "slugs": [{"slug": "/a"}]}, field="nope"
        )
        assert response.status_code == 400

    def test_invalid_slug(self, client, registry, make_object, admin_headers):
        obj_id = make_object().id
        response = put_slugs(client, admin_headers, obj_id, {"class_id": "product", "slugs": [{"slug": "a b"}]})
        assert response.status_code == 400
        body = response.get_json()
        assert body["error"] == "SlugValidationError"
        assert body["slug"] == "a b"

    def test_slug_owned_elsewhere(self, client, registry, make_object, admin_headers):
        first_id = make_object().id
        second_id = make_object().id
        put_slugs(client, admin_headers, first_id, {"class_id": "product", "slugs": [{"slug": "/a"}]})

        response = put_slugs(client, admin_headers, second_id, {"class_id": "product", "slugs": [{"slug": "/a"}]})
        assert response.status_code == 409
        body = response.get_json()
        assert body["error"] == "SlugAlreadyOwned"
        assert body["object_id"] == first_id
        assert body["fieldname"] == "slug"


class TestDelete:
    def test_delete_object_slugs(self, client, registry, make_object, admin_headers):
        obj_id = make_object().id
        registry.save(PlainRecord(obj_id), "slug", [SlugValue("/a"), SlugValue("/b")], class_id="product")

        response = client.delete(f"/api/v1/objects/{obj_id}/slugs", headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json() == {"deleted": 2}

    def test_delete_object(self, client, registry, make_object, admin_headers):
        obj_id = make_object().id
        registry.save(PlainRecord(obj_id), "slug", [SlugValue("/a")], class_id="product")

        response = client.delete(f"/api/v1/objects/{obj_id}", headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()["slugs_deleted"] == 1

        response = client.delete(f"/api/v1/objects/{obj_id}", headers=admin_headers)
        assert response.status_code == 404


class TestResolve:
    def test_resolve_in_site(self, client, registry, make_object, site):
        obj_id = make_object().id
        registry.save(PlainRecord(obj_id), "slug", [SlugValue("/a", site.id)], class_id="product")

        response = client.get("/api/v1/slugs/resolve?path=/a", headers={"X-Site-ID": str(site.id)})
        assert response.status_code == 200
        assert response.get_json() == {
            "slug": "/a",
            "site_id": site.id,
            "action": "product_detail",
            "domain": "shop.example.com",
        }

    def test_site_slug_is_not_visible_without_site(self, client, registry, make_object, site):
        obj_id = make_object().id
        registry.save(PlainRecord(obj_id), "slug", [SlugValue("/a", site.id)], class_id="product")

        response = client.get("/api/v1/slugs/resolve?path=/a")
        assert response.status_code == 404

    def test_unknown_site(self, client, registry):
        response = client.get("/api/v1/slugs/resolve?path=/a", headers={"X-Site-ID": "99"})
        assert response.status_code == 404

    def test_invalid_site_header(self, client, registry):
        response = client.get("/api/v1/slugs/resolve?path=/a", headers={"X-Site-ID": "shop"})
        assert response.status_code == 400

    def test_path_required(self, client, registry):
        response = client.get("/api/v1/slugs/resolve")
        assert response.status_code == 400


class TestOpenApi:
    def test_serves_openapi_document(self, client):
        response = client.get("/openapi/slugs.yaml")
        assert response.status_code == 200
        assert b"Slug Registry API" in response.data
