import uuid

import pytest

from backend.linktrace import schemas
from backend.linktrace.link_store import LinkStore, InvalidCode, CodeTaken, RESERVED_CODES, is_valid_code


def unique_url():
    return f"https://example.com/{uuid.uuid4().hex}"


def test_create_generates_code_that_redirects(client):
    url = unique_url()
    r = client.post("/api/create", json={"url": url})
    assert r.status_code == 200
    code = r.json()["code"]
    assert is_valid_code(code)

    r2 = client.get(f"/{code}")
    assert r2.status_code == 200
    assert url in r2.text


def test_existing_url_returns_existing_code(client):
    url = unique_url()
    first = client.post("/api/create", json={"url": url}).json()
    second = client.post("/api/create", json={"url": url}).json()
    assert second == {"code": first["code"], "existing": True}


def test_custom_code_is_case_insensitively_unique(client):
    custom = "My_Code-" + uuid.uuid4().hex[:6]
    r = client.post("/api/create", json={"url": unique_url(), "customCode": custom})
    assert r.status_code == 200
    assert r.json()["code"] == custom.lower()

    r2 = client.post("/api/create", json={"url": unique_url(), "customCode": custom.upper()})
    assert r2.status_code == 400
    assert r2.json()["detail"] == "Custom code already in use"


@pytest.mark.parametrize("custom", ["ab", "x" * 21, "has space", "semi;colon"])
def test_invalid_custom_code_is_400(client, custom):
    r = client.post("/api/create", json={"url": unique_url(), "customCode": custom})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid custom code format"


@pytest.mark.parametrize("url", ["javascript:alert(1)", "data:text/html,hi", "ftp://example.com/x", "example.com", ""])
def test_unsafe_urls_are_rejected(client, url):
    r = client.post("/api/create", json={"url": url})
    assert r.status_code == 422


def test_blank_custom_code_means_generated():
    data = schemas.LinkCreate(url="https://example.com", customCode="   ")
    assert data.custom_code is None


def test_link_store_operations(db):
    store = LinkStore(db)
    code = "ls-" + uuid.uuid4().hex[:8]
    assert not store.exists(code)
    link_id = store.create(code, "https://example.com/store")
    assert store.exists(code.upper())

    resolved = store.resolve(code)
    assert resolved.id == link_id
    assert resolved.target_url == "https://example.com/store"
    assert store.resolve("missing-" + uuid.uuid4().hex[:6]) is None

    with pytest.raises(CodeTaken):
        store.create(code, "https://example.com/other")
    with pytest.raises(InvalidCode):
        store.create("no", "https://example.com/other")

    assert store.generate_code() != code


@pytest.mark.parametrize("custom", ["health", "DOCS", "redoc", "static", "collector", "api"])
def test_route_names_cannot_be_taken_as_codes(client, custom):
    r = client.post("/api/create", json={"url": unique_url(), "customCode": custom})
    assert r.status_code == 400
    assert r.json()["detail"] == "Custom code is reserved"


def test_health_still_answers_after_reserved_create(client):
    client.post("/api/create", json={"url": unique_url(), "customCode": "health"})
    assert client.get("/health").json()["status"] == "ok"


def test_reserved_codes_are_refused_by_the_store(db):
    store = LinkStore(db)
    for code in RESERVED_CODES:
        with pytest.raises(InvalidCode):
            store.create(code.upper(), "https://example.com/reserved")
