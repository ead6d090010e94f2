from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from convergekit.core.config import HarnessConfig
from convergekit.errors import ProbeError
from convergekit.harness import ConvergenceHarness

ROOT = Path(__file__).resolve().parents[3]

Response = str | Exception | Callable[[], str]


def make_config(**overrides: Any) -> HarnessConfig:
    values: dict[str, Any] = {
        "await_timeout": 1.0,
        "lookup_timeout": 2.0,
        "polling_period": 0.2,
        "verbose": False,
        "run_id": "pytest-run",
    }
    values.update(overrides)
    return HarnessConfig(**values)


class FakeClock:
    """Virtual time: ``sleep`` advances ``now`` instead of blocking."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


def _resolve(response: Response) -> str:
    if isinstance(response, Exception):
        raise response
    if callable(response):
        return response()
    return response


class FakeProvider:
    """Scripted query provider; the last response for a kind repeats forever."""

    def __init__(self, responses: dict[str, Iterable[Response]] | None = None) -> None:
        self.responses: dict[str, list[Response]] = {k: list(v) for k, v in (responses or {}).items()}
        self.calls: list[tuple[str, str]] = []
        self.applied: list[str] = []
        self.deleted: list[str] = []

    def set(self, kind: str, *responses: Response) -> None:
        self.responses[kind] = list(responses)

    def run_query(self, kind: str, output_format: str) -> str:
        self.calls.append((kind, output_format))
        queue = self.responses.get(kind)
        if not queue:
            raise ProbeError(f"no such resource type: {kind}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        return _resolve(response)

    def apply(self, path: Path | str) -> str:
        self.applied.append(str(path))
        return f"applied {path}"

    def delete(self, path: Path | str) -> str:
        self.deleted.append(str(path))
        return f"deleted {path}"


class FakeResolver:
    """Scripted resolver; each name maps to a sequence of results or errors."""

    def __init__(self) -> None:
        self.hosts: dict[str, list[list[str] | Exception]] = {}
        self.txts: dict[str, list[list[str] | Exception]] = {}
        self.calls: list[tuple[str, str]] = []

    def _next(self, table: dict[str, list[list[str] | Exception]], name: str) -> list[str]:
        queue = table.get(name)
        if not queue:
            raise ProbeError(f"lookup {name}: no such host")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return list(item)

    def lookup_host(self, name: str) -> list[str]:
        self.calls.append(("host", name))
        return self._next(self.hosts, name)

    def lookup_txt(self, name: str) -> list[str]:
        self.calls.append(("txt", name))
        return self._next(self.txts, name)


def make_harness(
    provider: FakeProvider | None = None,
    resolver: FakeResolver | None = None,
    clock: FakeClock | None = None,
    **overrides: Any,
) -> ConvergenceHarness:
    return ConvergenceHarness(
        make_config(**overrides),
        provider=provider or FakeProvider(),
        resolver=resolver or FakeResolver(),
        clock=clock or FakeClock(),
    )
