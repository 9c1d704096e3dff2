"""Service test fixtures — async DB, seeded configuration, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - The directory authenticator is always a FakeDirectory (no sockets)
    - bcrypt runs with 4 rounds to keep hashing fast

Design Decisions:
    - SQLite in-memory: fast, no external dependency; the unique constraint
      and conditional UPDATE behave the same as on PostgreSQL
    - Seed helpers are factory fixtures so each test states only the settings
      it cares about
"""

from types import SimpleNamespace

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from teamgate.api.routes.index import get_directory_authenticator
from teamgate.core.password_hashing import hash_password
from teamgate.db.base import Base
from teamgate.infrastructure.database import get_db
from teamgate.main import app
from teamgate.models.configuration import ConfigurationSetting, PasswordType
from teamgate.models.logo import Logo
from teamgate.models.registration_token import RegistrationToken
from teamgate.models.team import Team
from teamgate.services.config_gate import ConfigGate
from teamgate.services.invitation_tokens import InvitationTokenService
from teamgate.services.login_service import LoginService
from teamgate.services.logo_resolver import LogoResolver
from teamgate.services.registration_service import RegistrationService
from teamgate.services.session_issuer import SessionIssuer
from teamgate.services.session_store import SessionStore
from teamgate.services.team_registry import TeamRegistry
from tests.services.fake_directory import FakeDirectory

DEFAULT_CONFIG = {
    "registration": "1",
    "registration_type": "1",
    "login": "1",
    "login_select": "0",
    "login_strongpasswords": "0",
    "password_type": "basic",
    "ldap": "0",
    "ldap_server": "ldap://directory.test",
    "ldap_port": "389",
    "ldap_domain_suffix": "@ctf.test",
}

PASSWORD_TYPES = {
    "basic": r".{2,}",
    "strong": r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}",
}

DEFAULT_LOGOS = ["badger", "fox", "owl"]


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def seed_config(test_db):
    """Insert configuration rows; keyword overrides replace defaults."""
    async def _seed(**overrides: str):
        values = {**DEFAULT_CONFIG, **overrides}
        for field, value in values.items():
            test_db.add(ConfigurationSetting(field=field, value=value))
        for field, pattern in PASSWORD_TYPES.items():
            test_db.add(PasswordType(field=field, value=pattern))
        await test_db.commit()
    return _seed


@pytest.fixture
async def seed_logos(test_db):
    """Default catalogue plus a protected admin logo."""
    for name in DEFAULT_LOGOS:
        test_db.add(Logo(name=name))
    test_db.add(Logo(name="admin", protected=True))
    await test_db.commit()
    return DEFAULT_LOGOS


@pytest.fixture
def seed_team(test_db):
    """Insert a team directly, bypassing registration."""
    async def _seed(
        name: str, password: str, admin: bool = False, active: bool = True,
    ) -> Team:
        team = Team(
            name=name, password_hash=hash_password(password, rounds=4),
            logo="fox", admin=admin, active=active,
        )
        test_db.add(team)
        await test_db.commit()
        return team
    return _seed


@pytest.fixture
def seed_token(test_db):
    async def _seed(token: str, used: bool = False) -> RegistrationToken:
        row = RegistrationToken(token=token, used=used)
        test_db.add(row)
        await test_db.commit()
        return row
    return _seed


@pytest.fixture
def fake_directory():
    return FakeDirectory()


@pytest.fixture
def services(test_db, fake_directory):
    """Wired collaborators around the test DB session."""
    config = ConfigGate(test_db)
    teams = TeamRegistry(test_db, bcrypt_rounds=4)
    store = SessionStore(test_db)
    tokens = InvitationTokenService(test_db)
    logos = LogoResolver(test_db, max_logo_bytes=10_000)
    login = LoginService(config, teams, SessionIssuer(store), fake_directory)
    registration = RegistrationService(
        config=config, directory=fake_directory, tokens=tokens,
        logos=logos, teams=teams, login=login,
    )
    return SimpleNamespace(
        config=config, teams=teams, store=store, tokens=tokens,
        logos=logos, login=login, registration=registration,
    )


@pytest.fixture
async def client(test_session_factory, fake_directory):
    """FastAPI test client with DB and directory dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_directory_authenticator] = lambda: fake_directory

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def file_session_factory(tmp_path):
    """Sessions on separate connections to one file-backed database."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'teamgate.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()
