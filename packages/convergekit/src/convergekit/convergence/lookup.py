from __future__ import annotations

from collections.abc import Callable

from convergekit.adapters._base import Resolver
from convergekit.core.config import HarnessConfig
from convergekit.core.logging import log_event, log_verbose
from convergekit.errors import ConvergenceTimeout, PreconditionFailed, ProbeError

from .engine import ConvergenceEngine

LookupFunc = Callable[[str], list[str]]


class LookupCheck:
    def __init__(self, resolver: Resolver, engine: ConvergenceEngine) -> None:
        self.resolver = resolver
        self.engine = engine

    @property
    def config(self) -> HarnessConfig:
        return self.engine.config

    def can_lookup(self, private_dns: bool = False) -> bool:
        """Whether DNS checks are meaningful here; callers skip them otherwise.

        Without a configured resolver endpoint nothing can be tested. With
        one, names in a private zone stay invisible to it.
        """
        if not self.config.dns_testable:
            return False
        return not private_dns

    def await_lookup_func(self, lookup: LookupFunc, dnsname: str, *expected: str) -> None:
        log_verbose(self.config, f"DNS lookup for {dnsname}...")
        wanted = set(expected)
        observed: list[list[str]] = []

        def check() -> tuple[bool, Exception | None]:
            try:
                values = lookup(dnsname)
            except ProbeError as exc:
                return False, exc
            observed[:] = [values]
            return set(values) == wanted, None

        description = f"lookup {dnsname} == {sorted(wanted)}"
        try:
            self.engine.await_with_timeout(description, check, self.config.lookup_timeout)
        except ConvergenceTimeout as exc:
            if observed:
                raise ConvergenceTimeout(f"{description} (last result {sorted(observed[0])})", exc.last_error) from None
            raise
        log_event(self.config, "debug", "lookup", "resolved", name=dnsname, values=sorted(wanted))

    def await_lookup(self, dnsname: str, *expected: str) -> None:
        self.await_lookup_func(self.resolver.lookup_host, dnsname, *expected)

    def await_lookup_txt(self, dnsname: str, *expected: str) -> None:
        self.await_lookup_func(self.resolver.lookup_txt, dnsname, *expected)

    def await_lookup_cname(self, dnsname: str, target: str) -> None:
        try:
            expected_addrs = self.resolver.lookup_host(target)
        except ProbeError as exc:
            raise PreconditionFailed(f"cannot resolve CNAME target {target} for {dnsname}: {exc}") from exc
        self.await_lookup(dnsname, *expected_addrs)

