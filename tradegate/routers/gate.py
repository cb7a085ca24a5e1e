from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from ..config.schema import GateParams
from ..errors import RejectReason, TradeGateError
from ..models import U64_MAX, U8_MAX, TradeSignal
from ..services.runtime import GateRuntime, get_runtime

router = APIRouter(prefix="/api/gate", tags=["gate"])

_STATUS_BY_REASON: Dict[RejectReason, int] = {
    RejectReason.UNAUTHORIZED_ACCESS: status.HTTP_403_FORBIDDEN,
    RejectReason.INVALID_CONFIGURATION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    RejectReason.EXCHANGE_ERROR: status.HTTP_502_BAD_GATEWAY,
    RejectReason.SLIPPAGE_EXCEEDED: status.HTTP_502_BAD_GATEWAY,
    RejectReason.EXCHANGE_TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
}


def _http_error(exc: TradeGateError) -> HTTPException:
    code = _STATUS_BY_REASON.get(exc.reason, status.HTTP_409_CONFLICT)
    return HTTPException(
        status_code=code, detail={"reason": exc.reason.value, "message": str(exc)}
    )


def get_caller(x_operator_id: str | None = Header(default=None)) -> str | None:
    if x_operator_id is None:
        return None
    return x_operator_id.strip() or None


class SignalPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pool: str | None = None
    token: str | None = None
    target_token: str | None = None
    risk_score: int = Field(..., ge=0, le=U8_MAX)
    liquidity: int = Field(..., ge=0, le=U64_MAX)
    trade_amount: int = Field(..., ge=0, le=U64_MAX)
    expected_output: int = Field(..., ge=0, le=U64_MAX)
    auto_execute: bool = False

    def to_signal(self) -> TradeSignal:
        return TradeSignal(
            pool_identifier=self.pool,
            token_identifier=self.token,
            target_token_identifier=self.target_token,
            risk_score=self.risk_score,
            liquidity=self.liquidity,
            trade_amount=self.trade_amount,
            expected_output=self.expected_output,
            auto_execute=self.auto_execute,
        )


class ParamsPayload(BaseModel):
    # Ranges are checked by the control plane so violations map to INVALID_CONFIGURATION.
    model_config = ConfigDict(extra="forbid")

    max_trade_amount: int
    min_liquidity: int
    max_slippage: int
    risk_threshold: int


class SettlementConfirmation(BaseModel):
    model_config = ConfigDict(extra="forbid")

    reference: str | None = None


@router.post("/initialize", status_code=status.HTTP_201_CREATED)
async def initialize(
    payload: ParamsPayload,
    caller: str | None = Depends(get_caller),
    runtime: GateRuntime = Depends(get_runtime),
) -> Dict[str, Any]:
    if caller is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="missing operator id")
    try:
        record = await runtime.control.initialize(caller, payload.model_dump())
    except TradeGateError as exc:
        raise _http_error(exc) from exc
    return record.as_dict()


@router.post("/signals")
async def process_signal(
    payload: SignalPayload, runtime: GateRuntime = Depends(get_runtime)
) -> Dict[str, Any]:
    try:
        decision = await runtime.authorizer.process_signal(payload.to_signal())
    except TradeGateError as exc:
        raise _http_error(exc) from exc
    return decision.as_dict()


@router.post("/pause")
async def pause(
    caller: str | None = Depends(get_caller), runtime: GateRuntime = Depends(get_runtime)
) -> Dict[str, Any]:
    try:
        event = await runtime.control.pause(caller)
    except TradeGateError as exc:
        raise _http_error(exc) from exc
    return {"paused": True, "authority": event.authority, "ts": event.timestamp.isoformat()}


@router.post("/resume")
async def resume(
    caller: str | None = Depends(get_caller), runtime: GateRuntime = Depends(get_runtime)
) -> Dict[str, Any]:
    try:
        await runtime.control.resume(caller)
    except TradeGateError as exc:
        raise _http_error(exc) from exc
    return {"paused": False}


@router.put("/config")
async def reconfigure(
    payload: ParamsPayload,
    caller: str | None = Depends(get_caller),
    runtime: GateRuntime = Depends(get_runtime),
) -> Dict[str, Any]:
    try:
        params: GateParams = await runtime.control.reconfigure(caller, payload.model_dump())
    except TradeGateError as exc:
        raise _http_error(exc) from exc
    return params.model_dump()


@router.post("/settlements/confirm")
async def confirm_settlement(
    payload: SettlementConfirmation, runtime: GateRuntime = Depends(get_runtime)
) -> Dict[str, Any]:
    try:
        successful = await runtime.authorizer.record_success(payload.reference)
    except TradeGateError as exc:
        raise _http_error(exc) from exc
    return {"successful_trades": successful}


@router.get("/state")
def gate_state(runtime: GateRuntime = Depends(get_runtime)) -> Dict[str, Any]:
    return runtime.state()


@router.get("/events")
def gate_events(
    event: str | None = Query(default=None),
    limit: int = Query(default=100, ge=0, le=1000),
    runtime: GateRuntime = Depends(get_runtime),
) -> Dict[str, Any]:
    return {"events": runtime.journal.records(event=event, limit=limit)}


__all__ = ["router"]
