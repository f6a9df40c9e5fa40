from pathlib import Path

import httpx
import pytest

from family_tasks.core.database import init_db, make_engine, make_sessionmaker
from family_tasks.main import create_app


@pytest.fixture()
async def engine(tmp_path: Path):
    """A fresh SQLite database per test, schema already created."""
    engine = make_engine(f"sqlite+aiosqlite:///{tmp_path / 'family_tasks.sqlite3'}", echo=False)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db(engine):
    async with make_sessionmaker(engine)() as session:
        yield session


@pytest.fixture()
async def api(engine):
    """httpx client talking to the app in-process."""
    app = create_app(engine=engine, configure_logging=False)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
