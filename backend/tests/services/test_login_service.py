"""Login Orchestrator — verify, gate, issue.

Tests cover:
    - correct credentials log in and redirect to "game"
    - admins redirect to "admin" and bypass login="0"
    - login="0" rejects regular teams even with correct credentials
    - wrong passwords fail with "Login failed" and leave the session empty
    - with the directory enabled, non-admins are verified by a directory bind
    - a successful login is logged with the team and client address
"""

import logging

from teamgate.core.domain_types import Destination, OutcomeTag, SessionKey, TeamId
from teamgate.core.errors import DirectoryCredentialsError
from teamgate.core.outcomes import LOGIN_FAILED


async def test_regular_team_logs_in(services, seed_config, seed_team):
    await seed_config()
    team_id = TeamId((await seed_team("Owls", "pw")).id)
    session = await services.store.load(None)

    outcome = await services.login.login(team_id, "pw", session, "10.0.0.1")

    assert outcome.ok
    assert outcome.redirect == Destination.GAME
    assert session.get(SessionKey.TEAM_ID) == str(team_id)


async def test_admin_redirects_to_admin_even_when_login_disabled(
    services, seed_config, seed_team,
):
    await seed_config(login="0")
    team_id = TeamId((await seed_team("Root", "pw", admin=True)).id)
    session = await services.store.load(None)

    outcome = await services.login.login(team_id, "pw", session, "10.0.0.1")

    assert outcome.ok
    assert outcome.redirect == Destination.ADMIN
    assert session.get(SessionKey.ADMIN) == "1"


async def test_login_disabled_rejects_regular_team(
    services, seed_config, seed_team,
):
    await seed_config(login="0")
    team_id = TeamId((await seed_team("Owls", "pw")).id)
    session = await services.store.load(None)

    outcome = await services.login.login(team_id, "pw", session, "10.0.0.1")

    assert not outcome.ok
    assert outcome.message == LOGIN_FAILED
    assert outcome.category == OutcomeTag.LOGIN
    assert outcome.reason == "LOGIN_DISABLED"
    assert not session.active


async def test_wrong_password_fails(services, seed_config, seed_team):
    await seed_config()
    team_id = TeamId((await seed_team("Owls", "pw")).id)
    session = await services.store.load(None)

    outcome = await services.login.login(team_id, "nope", session, "10.0.0.1")

    assert not outcome.ok
    assert outcome.reason == "BAD_CREDENTIALS"
    assert session.is_new


# ─── directory-path login ────────────────────────────────────────

async def test_directory_login_binds_with_team_name(
    services, seed_config, seed_team, fake_directory,
):
    await seed_config(ldap="1")
    team_id = TeamId((await seed_team("Owls", "escrow-secret")).id)
    session = await services.store.load(None)

    outcome = await services.login.login(team_id, "dir-pass", session, "10.0.0.1")

    assert outcome.ok
    username, password, server = fake_directory.calls[0]
    assert (username, password) == ("Owls", "dir-pass")
    assert server.domain_suffix == "@ctf.test"


async def test_directory_rejection_fails_login(
    services, seed_config, seed_team, fake_directory,
):
    await seed_config(ldap="1")
    fake_directory.error = DirectoryCredentialsError("Owls@ctf.test")
    team_id = TeamId((await seed_team("Owls", "escrow-secret")).id)
    session = await services.store.load(None)

    outcome = await services.login.login(team_id, "dir-pass", session, "10.0.0.1")

    assert outcome.reason == "BAD_CREDENTIALS"
    assert not session.active


async def test_admin_skips_directory(
    services, seed_config, seed_team, fake_directory,
):
    await seed_config(ldap="1")
    team_id = TeamId((await seed_team("Root", "local-pw", admin=True)).id)
    session = await services.store.load(None)

    outcome = await services.login.login(team_id, "local-pw", session, "10.0.0.1")

    assert outcome.redirect == Destination.ADMIN
    assert fake_directory.calls == []


async def test_successful_login_is_logged(services, seed_config, seed_team, caplog):
    await seed_config()
    team_id = TeamId((await seed_team("Owls", "pw")).id)
    session = await services.store.load(None)

    with caplog.at_level(logging.INFO, logger="teamgate.services.login_service"):
        await services.login.login(team_id, "pw", session, "10.0.0.1")

    record = next(r for r in caplog.records if r.message.startswith("Login succeeded"))
    assert record.message == "Login succeeded (fresh session=True)"
    assert record.team_id == team_id
    assert record.client_ip == "10.0.0.1"
