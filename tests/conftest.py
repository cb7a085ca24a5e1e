from __future__ import annotations

import pytest

from tradegate.config.schema import GateParams
from tradegate.control.plane import ControlPlane
from tradegate.events.journal import EventJournal
from tradegate.models import TradeSignal
from tradegate.services import runtime as runtime_module
from tradegate.services.authorizer import TradeAuthorizer
from tradegate.services.store import ConfigStore, ConfigStoreHolder

from tests.fakes.fake_exchange import FakeExchangeExecutor

AUTHORITY = "AuthorityPubkey1111111111111111111111111"
POOL = "PoolPubkey111111111111111111111111111111"
TOKEN = "So11111111111111111111111111111111111111112"
TARGET = "MemeMint11111111111111111111111111111111"


def make_params(**overrides: int) -> GateParams:
    values = {
        "max_trade_amount": 1000,
        "min_liquidity": 500,
        "max_slippage": 300,
        "risk_threshold": 5,
    }
    values.update(overrides)
    return GateParams(**values)


def make_signal(**overrides: object) -> TradeSignal:
    values: dict[str, object] = {
        "pool_identifier": POOL,
        "token_identifier": TOKEN,
        "target_token_identifier": TARGET,
        "risk_score": 7,
        "liquidity": 600,
        "trade_amount": 400,
        "expected_output": 1000,
        "auto_execute": False,
    }
    values.update(overrides)
    return TradeSignal(**values)  # type: ignore[arg-type]


def make_config(**overrides: object) -> ConfigStore:
    config = ConfigStore.create(AUTHORITY, make_params())
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


@pytest.fixture(autouse=True)
def _reset_runtime(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "TRADEGATE_CONFIG",
        "TRADEGATE_AUTHORITY",
        "TRADEGATE_AUTO_INITIALIZE",
        "TRADEGATE_MAX_SLIPPAGE",
        "TRADEGATE_COOLDOWN_SEC",
    ):
        monkeypatch.delenv(name, raising=False)
    runtime_module.reset_for_tests()
    yield
    runtime_module.reset_for_tests()


@pytest.fixture
def holder() -> ConfigStoreHolder:
    return ConfigStoreHolder()


@pytest.fixture
def journal() -> EventJournal:
    return EventJournal()


@pytest.fixture
def control(holder: ConfigStoreHolder, journal: EventJournal) -> ControlPlane:
    return ControlPlane(holder, journal=journal)


@pytest.fixture
def exchange() -> FakeExchangeExecutor:
    return FakeExchangeExecutor()


@pytest.fixture
def authorizer(
    holder: ConfigStoreHolder, journal: EventJournal, exchange: FakeExchangeExecutor
) -> TradeAuthorizer:
    return TradeAuthorizer(holder, exchange, journal=journal, exchange_timeout_sec=0.2)


@pytest.fixture
async def initialized(control: ControlPlane) -> ConfigStore:
    return await control.initialize(AUTHORITY, make_params())
