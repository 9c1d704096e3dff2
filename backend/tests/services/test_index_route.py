"""Index Route — POST /api/v1/index end to end over the ASGI app.

Tests cover:
    - unknown actions return "Invalid action" with category "index"
    - malformed envelopes and parameters return 400
    - register_team logs the new team in and sets the session cookie
    - login_team resolves by name or by id depending on login_select
    - an existing session cookie is kept, not reissued
"""

URL = "/api/v1/index"
COOKIE = "teamgate_session"

REGISTER = {
    "action": "register_team",
    "teamname": "Owls",
    "password": "hunter22",
    "logo": "fox",
    "isCustomLogo": False,
}


def _session_cookie(response) -> str | None:
    header = response.headers.get("set-cookie")
    if not header or not header.startswith(f"{COOKIE}="):
        return None
    return header.split(";", 1)[0].split("=", 1)[1]


# ─── envelope ────────────────────────────────────────────────────

async def test_unknown_action(client, seed_config):
    await seed_config()
    response = await client.post(URL, json={"action": "dance"})

    assert response.status_code == 200
    assert response.json() == {
        "result": "ERROR", "message": "Invalid action", "category": "index",
    }
    assert _session_cookie(response) is None


async def test_malformed_action_is_400(client):
    response = await client.post(URL, json={"action": "drop table"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_bad_params_are_400(client, seed_config):
    await seed_config()
    body = dict(REGISTER)
    del body["password"]
    response = await client.post(URL, json=body)
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_missing_configuration_is_500(client):
    response = await client.post(URL, json=REGISTER)
    assert response.status_code == 500
    assert response.json()["error"]["code"] == "CONFIG_NOT_FOUND"


# ─── register_team ───────────────────────────────────────────────

async def test_register_sets_session_cookie(client, seed_config, seed_logos):
    await seed_config()
    response = await client.post(URL, json=REGISTER)

    assert response.json() == {
        "result": "OK", "message": "Login successful", "redirect": "game",
    }
    assert _session_cookie(response)
    assert "httponly" in response.headers["set-cookie"].lower()


async def test_register_names_with_roster(client, seed_config, seed_logos):
    await seed_config()
    response = await client.post(URL, json={
        **REGISTER,
        "action": "register_names",
        "names": '["Ann"]',
        "emails": '["ann@x.test"]',
    })
    assert response.json()["result"] == "OK"


async def test_registration_failure_hides_reason(client, seed_config, seed_logos):
    await seed_config(registration="0")
    response = await client.post(URL, json=REGISTER)
    assert response.json() == {
        "result": "ERROR", "message": "Registration failed",
        "category": "registration",
    }


# ─── login_team ──────────────────────────────────────────────────

async def test_login_by_name(client, seed_config, seed_team):
    await seed_config(login_select="0")
    await seed_team("Owls", "pw")
    response = await client.post(
        URL, json={"action": "login_team", "teamname": "Owls", "password": "pw"},
    )
    assert response.json()["redirect"] == "game"
    assert _session_cookie(response)


async def test_login_unknown_name_fails(client, seed_config):
    await seed_config(login_select="0")
    response = await client.post(
        URL, json={"action": "login_team", "teamname": "Nobody", "password": "pw"},
    )
    assert response.json() == {
        "result": "ERROR", "message": "Login failed", "category": "login",
    }


async def test_login_by_id(client, seed_config, seed_team):
    await seed_config(login_select="1")
    team_id = (await seed_team("Root", "pw", admin=True)).id
    response = await client.post(
        URL, json={"action": "login_team", "team_id": team_id, "password": "pw"},
    )
    assert response.json()["redirect"] == "admin"


async def test_login_by_id_requires_team_id(client, seed_config, seed_team):
    await seed_config(login_select="1")
    await seed_team("Owls", "pw")
    response = await client.post(
        URL, json={"action": "login_team", "teamname": "Owls", "password": "pw"},
    )
    assert response.json()["message"] == "Login failed"


async def test_existing_cookie_is_kept(client, seed_config, seed_team):
    await seed_config()
    await seed_team("Owls", "pw")
    login = {"action": "login_team", "teamname": "Owls", "password": "pw"}

    first = await client.post(URL, json=login)
    cookie = _session_cookie(first)
    second = await client.post(
        URL, json=login, headers={"Cookie": f"{COOKIE}={cookie}"},
    )

    assert second.json()["result"] == "OK"
    assert _session_cookie(second) is None
