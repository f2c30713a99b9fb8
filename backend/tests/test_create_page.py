import logging

import pytest

from conftest import CONTENT_BLOCKS_KEY, basic_auth
from metrifi import create_app
from metrifi.config import TestingConfig
from metrifi.errors import ImproperlyConfigured
from metrifi.extensions import db
from metrifi.models.audit_log import AuditLog
from metrifi.models.field import FieldDefinition, FieldValue
from metrifi.models.page import Page
from metrifi.services.content import ContentStore, PageCreationError
from metrifi.services.fields import FieldStore

URL = "/metrifi/v1/create-page"
FALLBACK = "field_5b92ba6a9b055"


def test_round_trip(client, editor_headers):
    payload = {
        "title": "T",
        "content": "<p>ok</p><script>bad()</script>",
        "acf": {"content_blocks": [{"acf_fc_layout": "hero", "heading": "<b>Hi</b>"}]},
    }

    res = client.post(URL, json=payload, headers=editor_headers)

    assert res.status_code == 200
    body = res.get_json()
    assert body["title"] == "T"
    assert body["link"] == f"http://example.test/?page_id={body['id']}"
    assert body["acf"]["content_blocks"] == [{"acf_fc_layout": "hero", "heading": "Hi"}]

    page = db.session.get(Page, body["id"])
    assert page.status == "draft"
    assert page.type == "page"
    assert "<p>ok</p>" in page.content
    assert "<script" not in page.content

    stored = FieldValue.query.filter_by(record_id=page.id).one()
    assert stored.field_key == CONTENT_BLOCKS_KEY


def test_created_page_is_audited(client, editor_headers):
    res = client.post(URL, json={"title": "Audited"}, headers=editor_headers)

    log = AuditLog.query.filter_by(action="page.create").one()
    assert log.entity_id == res.get_json()["id"]
    assert log.actor_id is not None


def test_title_is_sanitized(client, editor_headers):
    res = client.post(URL, json={"title": "  <i>Spring</i>\nSale  "}, headers=editor_headers)

    assert res.get_json()["title"] == "Spring Sale"


@pytest.mark.parametrize("payload", [
    {},
    {"title": ""},
    {"title": "   "},
    {"title": None},
    {"content": "<p>no title</p>"},
])
def test_missing_title_is_rejected_without_creating(client, editor_headers, payload):
    res = client.post(URL, json=payload, headers=editor_headers)

    assert res.status_code == 400
    assert res.get_json()["code"] == "INVALID_PARAM"
    assert Page.query.count() == 0


def test_non_json_body_is_rejected(client, editor_headers):
    res = client.post(URL, data="title=x", headers=editor_headers)

    assert res.status_code == 400
    assert Page.query.count() == 0


def test_no_credentials_is_unauthenticated(client):
    res = client.post(URL, json={"title": "T"})

    assert res.status_code == 401
    assert res.get_json() == {
        "code": "UNAUTHENTICATED",
        "message": "Authentication required.",
        "data": {"status": 401},
    }
    assert Page.query.count() == 0


def test_malformed_credentials_are_unauthenticated(client):
    res = client.post(URL, json={"title": "T"}, headers={"Authorization": "Basic bm9jb2xvbg=="})

    assert res.status_code == 401
    assert Page.query.count() == 0


def test_subscriber_is_forbidden(client, reader_headers):
    res = client.post(URL, json={"title": "T"}, headers=reader_headers)

    assert res.status_code == 403
    assert res.get_json()["code"] == "FORBIDDEN"
    assert Page.query.count() == 0


def test_wrong_password_is_forbidden(client):
    res = client.post(URL, json={"title": "T"}, headers=basic_auth("editor", "nope"))

    assert res.status_code == 403
    assert Page.query.count() == 0


def test_bad_block_does_not_fail_the_page(client, editor_headers):
    payload = {
        "title": "Blocks",
        "acf": {"content_blocks": [
            {"heading": "no layout"},
            {"acf_fc_layout": "text", "body": "kept"},
        ]},
    }

    res = client.post(URL, json=payload, headers=editor_headers)

    assert res.status_code == 200
    assert res.get_json()["acf"]["content_blocks"] == [{"acf_fc_layout": "text", "body": "kept"}]


def test_without_blocks_nothing_is_written(client, editor_headers):
    res = client.post(URL, json={"title": "Plain"}, headers=editor_headers)

    assert res.status_code == 200
    assert res.get_json()["acf"] == {"content_blocks": None}
    assert FieldValue.query.count() == 0


def test_fallback_key_is_used_when_field_is_unregistered(client, editor_headers, caplog):
    FieldDefinition.query.delete()
    db.session.commit()
    payload = {"title": "Fallback", "acf": {"content_blocks": [{"acf_fc_layout": "hero"}]}}

    with caplog.at_level(logging.WARNING):
        res = client.post(URL, json=payload, headers=editor_headers)

    assert res.status_code == 200
    stored = FieldValue.query.filter_by(record_id=res.get_json()["id"]).one()
    assert stored.field_key == FALLBACK
    assert stored.value == [{"acf_fc_layout": "hero"}]
    assert FALLBACK in caplog.text


def test_field_write_failure_still_succeeds(client, editor_headers, monkeypatch, caplog):
    monkeypatch.setattr(FieldStore, "write_field", lambda self, key, value, record_id: False)
    payload = {"title": "Partial", "acf": {"content_blocks": [{"acf_fc_layout": "hero"}]}}

    with caplog.at_level(logging.WARNING):
        res = client.post(URL, json=payload, headers=editor_headers)

    assert res.status_code == 200
    body = res.get_json()
    assert body["id"]
    assert body["title"] == "Partial"
    assert body["link"].endswith(body["id"])
    assert body["acf"]["content_blocks"] is None
    assert "Failed to update field" in caplog.text


def test_creation_failure_skips_field_work(client, editor_headers, monkeypatch):
    def fail(self, data, author_id=None):
        raise PageCreationError("db down")

    writes = []
    monkeypatch.setattr(ContentStore, "create_page", fail)
    monkeypatch.setattr(FieldStore, "write_field", lambda self, *args: writes.append(args) or True)

    payload = {"title": "T", "acf": {"content_blocks": [{"acf_fc_layout": "hero"}]}}
    res = client.post(URL, json=payload, headers=editor_headers)

    assert res.status_code == 500
    assert res.get_json()["code"] == "POST_CREATION_FAILED"
    assert writes == []


def test_publish_status_is_configurable(app, client, editor_headers):
    app.config["PAGE_STATUS"] = "publish"

    res = client.post(URL, json={"title": "Launch Day"}, headers=editor_headers)

    body = res.get_json()
    assert db.session.get(Page, body["id"]).status == "publish"
    assert body["link"] == "http://example.test/launch-day/"


def test_unsanitized_block_policy(app, client, editor_headers):
    app.config["BLOCK_SANITIZATION"] = "none"
    payload = {"title": "Raw", "acf": {"content_blocks": [{"acf_fc_layout": "hero", "heading": "<b>Hi</b>"}]}}

    res = client.post(URL, json=payload, headers=editor_headers)

    assert res.get_json()["acf"]["content_blocks"][0]["heading"] == "<b>Hi</b>"


def test_field_writes_can_be_disabled(app, client, editor_headers):
    app.config["FIELD_WRITES_ENABLED"] = False
    payload = {"title": "No fields", "acf": {"content_blocks": [{"acf_fc_layout": "hero"}]}}

    res = client.post(URL, json=payload, headers=editor_headers)

    assert res.status_code == 200
    assert FieldValue.query.count() == 0


def test_ampersands_survive_in_title_slug_and_blocks(client, editor_headers):
    payload = {
        "title": "Tom & Jerry",
        "acf": {"content_blocks": [{"acf_fc_layout": "team", "name": "R&D"}]},
    }

    res = client.post(URL, json=payload, headers=editor_headers)

    body = res.get_json()
    assert body["title"] == "Tom & Jerry"
    assert body["acf"]["content_blocks"] == [{"acf_fc_layout": "team", "name": "R&D"}]
    assert db.session.get(Page, body["id"]).slug == "tom-jerry"


def test_invalid_page_status_setting_is_a_server_error(app, client, editor_headers):
    app.config["PAGE_STATUS"] = "pending"

    res = client.post(URL, json={"title": "T"}, headers=editor_headers)

    assert res.status_code == 500
    assert res.get_json()["code"] == "CONFIGURATION_ERROR"
    assert Page.query.count() == 0


def test_invalid_block_policy_setting_is_a_server_error(app, client, editor_headers):
    app.config["BLOCK_SANITIZATION"] = "partial"

    res = client.post(URL, json={"title": "T"}, headers=editor_headers)

    assert res.status_code == 500
    assert Page.query.count() == 0


def test_create_app_rejects_invalid_page_status(monkeypatch):
    monkeypatch.setattr(TestingConfig, "PAGE_STATUS", "pending")

    with pytest.raises(ImproperlyConfigured):
        create_app("testing")
