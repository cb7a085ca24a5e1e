from __future__ import annotations

import pytest

from tradegate.config.schema import AppSettings, GateParams, ThrottleConfig
from tradegate.exchange.paper import PaperExchangeExecutor
from tradegate.services import runtime as runtime_module
from tradegate.services.runtime import build_runtime

from tests.conftest import AUTHORITY, make_signal


def test_auto_initialize_bootstraps_store() -> None:
    settings = AppSettings(
        authority=AUTHORITY,
        auto_initialize=True,
        params=GateParams(max_trade_amount=10, min_liquidity=1, max_slippage=0, risk_threshold=1),
    )
    runtime = build_runtime(settings)
    state = runtime.state()
    assert state["initialized"] is True
    assert state["config"]["authority"] == AUTHORITY
    assert isinstance(runtime.executor, PaperExchangeExecutor)


def test_auto_initialize_requires_authority() -> None:
    with pytest.raises(ValueError):
        build_runtime(AppSettings(auto_initialize=True))


def test_get_runtime_is_cached_until_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    first = runtime_module.get_runtime()
    assert runtime_module.get_runtime() is first
    runtime_module.reset_for_tests()
    assert runtime_module.get_runtime() is not first


@pytest.mark.asyncio
async def test_paper_executor_fills_at_minimum() -> None:
    settings = AppSettings(
        authority=AUTHORITY,
        auto_initialize=True,
        params=GateParams(max_trade_amount=1000, min_liquidity=500, max_slippage=300, risk_threshold=5),
        throttle=ThrottleConfig(max_daily_trades=1),
    )
    runtime = build_runtime(settings)
    decision = await runtime.authorizer.process_signal(make_signal(auto_execute=True))

    assert decision.settlement is not None
    assert decision.settlement.amount_out == 970
    assert decision.settlement.reference.startswith("paper-")
    assert runtime.state()["stats"]["throttle"]["trades_today"] == 1
