"""Prometheus instruments for gate decisions and control actions."""

from prometheus_client import Counter, Gauge

SIGNALS_TOTAL = Counter(
    "tradegate_signals_total",
    "Trade signals processed by the gate",
    ("result", "reason"),
)

EXECUTIONS_TOTAL = Counter(
    "tradegate_executions_total",
    "Exchange executions attempted for authorized signals",
    ("outcome",),
)

CONTROL_ACTIONS_TOTAL = Counter(
    "tradegate_control_actions_total",
    "Control plane operations by action and result",
    ("action", "result"),
)

PAUSED = Gauge(
    "tradegate_paused",
    "Whether trade authorization is paused (1) or active (0)",
)

__all__ = ["CONTROL_ACTIONS_TOTAL", "EXECUTIONS_TOTAL", "PAUSED", "SIGNALS_TOTAL"]
