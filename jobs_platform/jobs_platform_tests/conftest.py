import pytest
from fastapi.testclient import TestClient

from jobs_platform.jobs_platform.account_service.config import Settings
from jobs_platform.jobs_platform.account_service.db import create_db_engine, create_session_factory, init_db
from jobs_platform.jobs_platform.account_service.main import create_app

TEST_SECRET = "test-signing-secret-for-the-account-service"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'accounts.db'}",
        JWT_SECRET=TEST_SECRET,
        PASSWORD_HASH_ROUNDS=1000,
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def engine(settings):
    engine = create_db_engine(settings.DATABASE_URL)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = create_session_factory(engine)()
    yield session
    session.close()
