"""Routing — root greeting, catch-all 404, CORS and the unhandled-error envelope.

Invariants:
    - GET / returns 200 text/plain "Hello World!"
    - Every unmatched method/path returns 404 {"message": "This route does not exist"}
    - The catch-all never shadows a named route
    - Unhandled exceptions become 500 {"message": str(exc)}, still carrying CORS headers
    - Route prefixes are case-insensitive and one trailing slash is optional
"""

import pytest

NOT_FOUND = {"message": "This route does not exist"}


async def test_root_returns_hello_world(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert res.text == "Hello World!"
    assert res.headers["content-type"].startswith("text/plain")


@pytest.mark.parametrize("method, path", [
    ("GET", "/unknown-path"),
    ("POST", "/unknown-path"),
    ("DELETE", "/unknown-path"),
    ("GET", "/charactres"),
    ("GET", "/characters/1/extra"),
    ("GET", "/characters/1"),
    ("PATCH", "/characters"),
    ("PATCH", "/characters/1"),
    ("PUT", "/characters"),
    ("DELETE", "/characters"),
    ("POST", "/comics"),
    ("POST", "/"),
    ("TRACE", "/characters"),
    ("TRACE", "/unknown-path"),
    ("PROPFIND", "/comics"),
    ("GET", "/characters//"),
])
async def test_unmatched_routes_return_404(client, method, path):
    res = await client.request(method, path)
    assert res.status_code == 404
    assert res.json() == NOT_FOUND


async def test_unmatched_route_does_not_touch_store(client, store):
    await client.post("/characters", json={"name": "Thor"})
    await client.request("PATCH", "/characters/1", json={"name": "Odin"})
    assert store.list_page(0, 1).results[0].name == "Thor"


async def test_named_routes_not_shadowed_by_catch_all(client):
    assert (await client.get("/")).status_code == 200
    assert (await client.get("/characters", params={"source": "local"})).status_code == 200
    assert (await client.get("/comics")).status_code == 200
    assert (await client.post("/characters", json={"name": "Thor"})).status_code == 201
    assert (await client.put("/characters/1", json={})).status_code == 200
    assert (await client.delete("/characters/1")).status_code == 200


async def test_cors_header_present(client):
    res = await client.get("/", headers={"origin": "http://localhost:5173"})
    assert res.headers["access-control-allow-origin"] == "*"


async def test_unhandled_error_returns_500_envelope(client, store, monkeypatch):
    def explode(skip, limit):
        raise RuntimeError("store exploded")

    monkeypatch.setattr(store, "list_page", explode)
    res = await client.get(
        "/characters", params={"source": "local"},
        headers={"origin": "http://localhost:5173"},
    )

    assert res.status_code == 500
    assert res.json() == {"message": "store exploded"}
    assert res.headers["access-control-allow-origin"] == "*"


async def test_unhandled_error_leaves_next_request_working(client, store, monkeypatch):
    monkeypatch.setattr(store, "create", lambda payload: 1 / 0)
    res = await client.post("/characters", json={"name": "Thor"})
    assert res.status_code == 500
    monkeypatch.undo()
    assert (await client.post("/characters", json={"name": "Thor"})).status_code == 201


# --- Case-insensitive, non-strict routing -----------------------------------------

async def test_mixed_case_prefix_reaches_local_list(client):
    res = await client.get("/Characters", params={"source": "local"})
    assert res.status_code == 200
    assert res.json() == {"results": [], "total": 0}


async def test_trailing_slash_reaches_local_list(client):
    res = await client.get("/characters/", params={"source": "local"})
    assert res.status_code == 200
    assert res.json() == {"results": [], "total": 0}


async def test_mixed_case_comics_reaches_upstream(client, fake_upstream):
    res = await client.get("/COMICS/")
    assert res.status_code == 200
    assert fake_upstream.requests[0].url.path == "/comics"


async def test_mixed_case_and_trailing_slash_on_item_routes(client):
    await client.post("/CHARACTERS/", json={"name": "Thor"})
    res = await client.put("/Characters/1/", json={"name": "Odin"})
    assert res.status_code == 200
    assert res.json()["name"] == "Odin"
    res = await client.delete("/characters/1/")
    assert res.status_code == 200
    assert res.json()["deleted"]["name"] == "Odin"
