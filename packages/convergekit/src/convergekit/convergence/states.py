from __future__ import annotations

from collections.abc import Iterable

from convergekit.adapters._base import QueryProvider
from convergekit.errors import ProbeError, ScriptError
from convergekit.exit_codes import ERR_USAGE
from convergekit.resources import STATE_DELETED, ResourceKind, kind_name, state_label

from .engine import Check, ConvergenceEngine

STATE_QUERY_FORMAT = "-o=jsonpath={range .items[*]}{.metadata.name}={.status.state}{'\\n'}{end}"


def parse_states(raw: str) -> dict[str, str]:
    """Map ``name=state`` lines to a dict; lines of any other shape are skipped."""
    states: dict[str, str] = {}
    for line in raw.split("\n"):
        cols = line.split("=")
        if len(cols) == 2:
            states[cols[0]] = cols[1]
    return states


def states_match(states: dict[str, str], expected_state: str, names: Iterable[str]) -> bool:
    for name in names:
        if expected_state == STATE_DELETED:
            if name in states:
                return False
        elif states.get(name) != expected_state:
            return False
    return True


def describe_state_check(kind: ResourceKind | str, expected_state: str, names: Iterable[str]) -> str:
    return f"{kind_name(kind)} not {state_label(expected_state)}: {list(names)}"


class StateCheck:
    def __init__(self, provider: QueryProvider, engine: ConvergenceEngine) -> None:
        self.provider = provider
        self.engine = engine

    def snapshot(self, kind: ResourceKind | str) -> dict[str, str]:
        return parse_states(self.provider.run_query(kind_name(kind), STATE_QUERY_FORMAT))

    def predicate(self, kind: ResourceKind | str, expected_state: str, names: tuple[str, ...]) -> Check:
        def check() -> tuple[bool, Exception | None]:
            try:
                states = self.snapshot(kind)
            except ProbeError as exc:
                return False, exc
            return states_match(states, expected_state, names), None

        return check

    def await_state(self, kind: ResourceKind | str, expected_state: str, *names: str) -> None:
        if isinstance(kind, ResourceKind) and expected_state not in kind.states:
            allowed = ", ".join(state_label(s) for s in kind.states)
            raise ScriptError(
                f"{kind.name} has no terminal state {state_label(expected_state)!r} (expected one of: {allowed})",
                ERR_USAGE,
                kind="unsupported_state",
            )
        description = describe_state_check(kind, expected_state, names)
        self.engine.await_condition(description, self.predicate(kind, expected_state, names))
