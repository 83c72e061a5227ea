import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel import SQLModel

from config import ApplicationConfig
from src.adapter.database import build_engine, build_session_factory
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.app import create_app
from src.app.services.password import hash_password
from src.depends import get_unit_of_work
from src.domain.entities import User, UserRole
from tests.fixtures.json_loader import TestDataLoader
from tests.utils.api import API, bearer, login, register_tenant


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    # File database so concurrent sessions really contend for the write lock
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def client(session_factory):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def super_admin_token(client, session_factory, test_data):
    """Insert the platform super admin and log in as it"""
    credentials = test_data.get_copy("super_admin")
    async with session_factory() as session:
        session.add(
            User(
                tenant_id=None,
                email=credentials["email"],
                password_hash=hash_password(credentials["password"]),
                full_name="Super Admin",
                role=UserRole.super_admin,
            )
        )
        await session.commit()

    response = await client.post(
        f"{API}/auth/login",
        json={"email": credentials["email"], "password": credentials["password"]},
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]



@pytest_asyncio.fixture
async def acme(client, test_data):
    """Registered tenant 'acme' with its admin token"""
    payload = test_data.get_copy("register_acme")
    body = await register_tenant(client, payload)
    token = await login(
        client, payload["admin_email"], payload["admin_password"], payload["subdomain"]
    )
    return {"tenant": body["tenant"], "admin": body["admin_user"], "token": token}


@pytest_asyncio.fixture
async def globex(client, test_data):
    """A second, unrelated tenant"""
    payload = test_data.get_copy("register_globex")
    body = await register_tenant(client, payload)
    token = await login(
        client, payload["admin_email"], payload["admin_password"], payload["subdomain"]
    )
    return {"tenant": body["tenant"], "admin": body["admin_user"], "token": token}


@pytest_asyncio.fixture
async def acme_member(client, acme, test_data):
    """Plain user of acme with its token"""
    payload = test_data.get_copy("acme_member")
    response = await client.post(
        f"{API}/tenants/{acme['tenant']['id']}/users",
        json=payload,
        headers=bearer(acme["token"]),
    )
    assert response.status_code == 201, response.text
    token = await login(client, payload["email"], payload["password"], "acme")
    return {"user": response.json(), "token": token}
