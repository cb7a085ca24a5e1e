from .gate import CONTROL_ACTIONS_TOTAL, EXECUTIONS_TOTAL, PAUSED, SIGNALS_TOTAL

__all__ = ["CONTROL_ACTIONS_TOTAL", "EXECUTIONS_TOTAL", "PAUSED", "SIGNALS_TOTAL"]
