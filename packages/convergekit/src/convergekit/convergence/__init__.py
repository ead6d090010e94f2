from .engine import Check, CheckResult, ConvergenceEngine
from .listing import to_item_map
from .lookup import LookupCheck, LookupFunc
from .states import STATE_QUERY_FORMAT, StateCheck, parse_states, states_match

__all__ = [
    "Check",
    "CheckResult",
    "ConvergenceEngine",
    "LookupCheck",
    "LookupFunc",
    "STATE_QUERY_FORMAT",
    "StateCheck",
    "parse_states",
    "states_match",
    "to_item_map",
]
