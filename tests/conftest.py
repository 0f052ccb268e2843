"""Root conftest for all tests.

Shared fixtures: sample profiles, a mock-transport API client factory, and
deterministic random/clock sources for the fallback heuristic.
"""

import datetime as dt
import random
from collections.abc import Callable

import httpx
import pytest
import pytest_asyncio

from strength_compass.integrations.predictor.client import ApiClient
from strength_compass.integrations.predictor.tokens import TokenStore
from strength_compass.schemas.athlete import AthleteProfile, Equipment, Sex

TEST_BASE_URL = "http://predictor.test"
FIXED_NOW = dt.datetime(2024, 6, 15, 12, 0, tzinfo=dt.UTC)

Handler = Callable[[httpx.Request], httpx.Response]


class StubRandom(random.Random):
    """Random source returning scripted values for random() and a fixed randint()."""

    def __init__(self, values: list[float], randint_value: int = 65) -> None:
        super().__init__(0)
        self._values = list(values)
        self._randint_value = randint_value

    def random(self) -> float:
        return self._values.pop(0)

    def randint(self, a: int, b: int) -> int:
        return self._randint_value


def success_envelope(data: dict) -> dict:
    return {"success": True, "data": data}


@pytest.fixture
def sample_profile() -> AthleteProfile:
    """28-year-old 70 kg male raw lifter (neutral age and weight factors)."""
    return AthleteProfile(sex=Sex.MALE, age=28, bodyweight=70.0, equipment=Equipment.RAW)


@pytest.fixture
def female_profile() -> AthleteProfile:
    return AthleteProfile(sex=Sex.FEMALE, age=45, bodyweight=68.2, equipment=Equipment.RAW)


@pytest.fixture
def remote_prediction_data() -> dict:
    """A full /api/predict payload from the remote model."""
    return {
        "total_pred": 612.5,
        "squat_pred": 230.0,
        "bench_pred": 150.0,
        "deadlift_pred": 232.5,
        "pi_low": 580.0,
        "pi_high": 645.0,
        "percentile": 72,
        "confidence": 0.88,
        "metadata": {
            "model_version": "xgb-2.3.1",
            "prediction_date": "2024-06-15T12:00:00+00:00",
            "features_used": ["sex", "age", "bodyweight", "equipment"],
        },
    }


@pytest.fixture
def fixed_clock() -> Callable[[], dt.datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def token_store() -> TokenStore:
    return TokenStore()


@pytest_asyncio.fixture
async def make_api_client(token_store: TokenStore):
    """Factory for ApiClients backed by httpx.MockTransport; all are closed on teardown."""
    clients: list[ApiClient] = []

    def _make(handler: Handler, **kwargs) -> ApiClient:
        kwargs.setdefault("token_store", token_store)
        client = ApiClient(TEST_BASE_URL, transport=httpx.MockTransport(handler), **kwargs)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def stub_random() -> type[StubRandom]:
    return StubRandom


@pytest.fixture
def envelope() -> Callable[[dict], dict]:
    return success_envelope
