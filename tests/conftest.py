import random
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.locks import KeyedLock
from app.core.websocket import ConnectionManager, EventBroadcaster
from app.data import GENERAL_PERKS, PARTNERS
from app.main import create_app
from app.services.catalog import PerkCatalog
from app.services.ledger import Ledger


@pytest.fixture
def settings() -> Settings:
    # Long interval so API tests never see a background tick
    return Settings(
        _env_file=None,
        SIMULATION_INTERVAL_SECONDS=60.0,
        GEMINI_API_KEY=None,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(settings):
    app = create_app(settings, rng=random.Random(7))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def app_state(client):
    return client.app.state.services


@pytest.fixture
def user_headers(client):
    res = client.post("/api/user/login", json={"userid": "user", "password": "password"})
    assert res.status_code == 200, res.text
    return {"X-Auth-Cookie": res.json()["cookie"]}


@pytest.fixture
def dash_headers(client):
    res = client.post("/api/dash/login", json={"dashid": "admin", "password": "admin"})
    assert res.status_code == 200, res.text
    return {"X-Auth-Cookie": res.json()["cookie"]}


@pytest.fixture
def broadcaster():
    return EventBroadcaster(ConnectionManager(), history_limit=500)


@pytest.fixture
def locks():
    return KeyedLock()


@pytest.fixture
def ledger(locks):
    return Ledger(
        starting_balances={"user": Decimal("56.75")},
        seed_history=False,
        locks=locks,
        rng=random.Random(1),
    )


@pytest.fixture
def catalog(locks, broadcaster):
    return PerkCatalog(
        GENERAL_PERKS,
        PARTNERS,
        fixed_total_views={"aldi": 10000},
        locks=locks,
        rng=random.Random(3),
        broadcaster=broadcaster,
    )
