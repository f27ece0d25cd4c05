"""Token Routes: issue, read, extend and revoke over HTTP."""

from tests.sample_data import OTHER, OWNER, PASSWORD


async def test_issue_returns_token(client, signed_up):
    res = await client.post(
        "/api/v1/tokens", json={"identity": OWNER, "password": PASSWORD},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["owner_identity"] == OWNER
    assert len(body["id"]) == 20


async def test_issue_with_wrong_password_is_401(client, signed_up):
    res = await client.post(
        "/api/v1/tokens", json={"identity": OWNER, "password": "nope"},
    )
    assert res.status_code == 401


async def test_issue_for_unknown_user_is_404(client):
    res = await client.post(
        "/api/v1/tokens", json={"identity": OTHER, "password": PASSWORD},
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "OWNER_NOT_FOUND"


async def test_get_token(client, token_id):
    res = await client.get(f"/api/v1/tokens/{token_id}")
    assert res.status_code == 200
    assert res.json()["id"] == token_id


async def test_get_unknown_token_is_404(client):
    res = await client.get(f"/api/v1/tokens/{'x' * 20}")
    assert res.status_code == 404


async def test_get_with_wrong_length_id_is_400(client):
    res = await client.get("/api/v1/tokens/short")
    assert res.status_code == 400


async def test_extend_token(client, token_id):
    before = (await client.get(f"/api/v1/tokens/{token_id}")).json()
    res = await client.put(f"/api/v1/tokens/{token_id}", json={"extend": True})
    assert res.status_code == 200
    assert res.json()["expires_at"] >= before["expires_at"]


async def test_extend_false_is_400(client, token_id):
    res = await client.put(f"/api/v1/tokens/{token_id}", json={"extend": False})
    assert res.status_code == 400


async def test_revoke_token(client, token_id):
    res = await client.delete(f"/api/v1/tokens/{token_id}")
    assert res.status_code == 204
    gone = await client.get(f"/api/v1/tokens/{token_id}")
    assert gone.status_code == 404


async def test_revoked_token_no_longer_authorizes(client, token_id):
    await client.delete(f"/api/v1/tokens/{token_id}")
    res = await client.get(f"/api/v1/users/{OWNER}", headers={"token": token_id})
    assert res.status_code == 403
