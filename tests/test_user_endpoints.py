"""User routes against a real (in-memory SQLite) database."""


async def test_list_returns_newest_first(client, seed_users):
    res = await client.get("/api/user/")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["total_count"] == 3
    assert [u["email"] for u in data["users"]] == [
        "root@example.com", "grace@example.com", "ada@example.com",
    ]


async def test_list_paginates(client, seed_users):
    res = await client.get("/api/user/", params={"page": 2, "limit": 2})

    data = res.json()["data"]
    assert data["total_pages"] == 2
    assert [u["email"] for u in data["users"]] == ["ada@example.com"]


async def test_list_filters_by_role_and_status(client, seed_users):
    admins = (await client.get("/api/user/", params={"role": "admin"})).json()["data"]
    active = (await client.get("/api/user/", params={"is_active": "true"})).json()["data"]

    assert [u["email"] for u in admins["users"]] == ["root@example.com"]
    assert active["total_count"] == 2


async def test_get_user_returns_record(client, seed_users):
    ada = seed_users[0]

    res = await client.get(f"/api/user/{ada.id}")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["email"] == "ada@example.com"
    assert data["role"] == "user"
    assert data["is_active"] is True
    assert data["created_at"]


async def test_get_unknown_user_returns_404(client, seed_users):
    res = await client.get("/api/user/9999")

    assert res.status_code == 404
    assert res.json()["error"] == "User with ID 9999 not found"


async def test_update_changes_only_supplied_fields(client, seed_users):
    grace = seed_users[1]

    res = await client.put(f"/api/user/{grace.id}", json={"last_name": "Murray", "role": "moderator"})

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["first_name"] == "Grace"
    assert data["last_name"] == "Murray"
    assert data["role"] == "moderator"

    fetched = (await client.get(f"/api/user/{grace.id}")).json()["data"]
    assert fetched["last_name"] == "Murray"


async def test_delete_removes_user(client, seed_users):
    ada = seed_users[0]

    res = await client.delete(f"/api/user/{ada.id}")
    assert res.status_code == 200

    assert (await client.get(f"/api/user/{ada.id}")).status_code == 404
    assert (await client.delete(f"/api/user/{ada.id}")).status_code == 404
