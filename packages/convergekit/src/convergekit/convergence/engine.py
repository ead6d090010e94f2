"""Bounded-retry polling shared by every convergence check."""

from __future__ import annotations

from collections.abc import Callable

from convergekit.core.clock import Clock, SystemClock
from convergekit.core.config import HarnessConfig
from convergekit.core.logging import log_event
from convergekit.errors import ConvergenceTimeout, ScriptError
from convergekit.exit_codes import ERR_CONFIG

CheckResult = tuple[bool, Exception | None]
Check = Callable[[], CheckResult]


class ConvergenceEngine:
    def __init__(self, config: HarnessConfig, clock: Clock | None = None) -> None:
        self.config = config
        self.clock = clock or SystemClock()

    def await_condition(self, description: str, check: Check) -> None:
        self.await_with_timeout(description, check, self.config.await_timeout)

    def await_with_timeout(
        self,
        description: str,
        check: Check,
        timeout: float,
        polling_period: float | None = None,
    ) -> None:
        """Call ``check`` every polling period until it succeeds or ``timeout`` elapses.

        Errors returned by ``check`` never stop the loop; the one from the last
        attempt is attached to the ``ConvergenceTimeout`` raised at the deadline.
        """
        period = self.config.polling_period if polling_period is None else polling_period
        if period <= 0:
            raise ScriptError(f"polling_period must be > 0, got {period}", ERR_CONFIG, kind="config_error")
        err: Exception | None = None
        attempts = 0
        deadline = self.clock.monotonic() + timeout
        while self.clock.monotonic() < deadline:
            attempts += 1
            ok, err = check()
            if ok:
                log_event(self.config, "debug", "engine", "converged", check=description, attempts=attempts)
                return
            if err is not None:
                log_event(self.config, "debug", "engine", "probe-error", check=description, attempt=attempts, error=str(err))
            self.clock.sleep(period)
        log_event(self.config, "info", "engine", "timeout", check=description, attempts=attempts, timeout_s=timeout)
        raise ConvergenceTimeout(description, err)
