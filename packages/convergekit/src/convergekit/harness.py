"""Test-session facade over the kubectl provider, DNS client and convergence checks."""

from __future__ import annotations

import random
import string
from pathlib import Path
from typing import Any

from .adapters._base import ManifestProvider, Resolver
from .adapters.dns import DnsClient
from .adapters.kubectl import KubectlProvider
from .convergence.engine import Check, ConvergenceEngine
from .convergence.listing import to_item_map
from .convergence.lookup import LookupCheck, LookupFunc
from .convergence.states import StateCheck
from .core.clock import Clock
from .core.config import HarnessConfig
from .core.logging import log_event
from .manifests import names_by_kind, read_manifest
from .resources import DNS_ENTRY, DNS_PROVIDER, STATE_DELETED, STATE_ERROR, STATE_READY, ResourceKind, kind_name

_LETTERS = string.ascii_lowercase


def rand_string(n: int) -> str:
    return "".join(random.choice(_LETTERS) for _ in range(n))


class ConvergenceHarness:
    def __init__(
        self,
        config: HarnessConfig,
        provider: ManifestProvider | None = None,
        resolver: Resolver | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config
        self.provider: ManifestProvider = provider if provider is not None else KubectlProvider(config)
        self.resolver = resolver if resolver is not None else DnsClient(config.dns_server)
        self.engine = ConvergenceEngine(config, clock)
        self.states = StateCheck(self.provider, self.engine)
        self.lookups = LookupCheck(self.resolver, self.engine)

    @classmethod
    def create_default(cls, dns_server: str | None = None) -> ConvergenceHarness:
        return cls(HarnessConfig.create_default(dns_server))

    # manifests

    def apply(self, path: Path | str) -> str:
        log_event(self.config, "info", "kubectl", "apply", file=str(path), namespace=self.config.namespace)
        return self.provider.apply(path)

    def delete(self, path: Path | str) -> str:
        log_event(self.config, "info", "kubectl", "delete", file=str(path), namespace=self.config.namespace)
        return self.provider.delete(path)

    def await_manifest(self, path: Path, expected_state: str) -> dict[str, list[str]]:
        """Await every modelled resource declared in ``path``; returns what was awaited."""
        awaited: dict[str, list[str]] = {}
        for kind, names in names_by_kind(read_manifest(path)).items():
            self.await_state(kind, expected_state, *names)
            awaited[kind.name] = names
        return awaited

    # listings

    def get_all(self, kind: ResourceKind | str) -> dict[str, dict[str, Any]]:
        return to_item_map(self.provider.run_query(kind_name(kind), "-o=json"))

    def get_all_dns_entries(self) -> dict[str, dict[str, Any]]:
        return self.get_all(DNS_ENTRY)

    # convergence

    def await_condition(self, description: str, check: Check) -> None:
        self.engine.await_condition(description, check)

    def await_with_timeout(self, description: str, check: Check, timeout: float) -> None:
        self.engine.await_with_timeout(description, check, timeout)

    def await_state(self, kind: ResourceKind | str, expected_state: str, *names: str) -> None:
        self.states.await_state(kind, expected_state, *names)

    def await_dns_provider_ready(self, *names: str) -> None:
        self.await_state(DNS_PROVIDER, STATE_READY, *names)

    def await_dns_provider_error(self, *names: str) -> None:
        self.await_state(DNS_PROVIDER, STATE_ERROR, *names)

    def await_dns_provider_deleted(self, *names: str) -> None:
        self.await_state(DNS_PROVIDER, STATE_DELETED, *names)

    def await_dns_entries_ready(self, *names: str) -> None:
        self.await_state(DNS_ENTRY, STATE_READY, *names)

    def await_dns_entries_error(self, *names: str) -> None:
        self.await_state(DNS_ENTRY, STATE_ERROR, *names)

    def await_dns_entries_deleted(self, *names: str) -> None:
        self.await_state(DNS_ENTRY, STATE_DELETED, *names)

    # dns

    def can_lookup(self, private_dns: bool = False) -> bool:
        return self.lookups.can_lookup(private_dns)

    def await_lookup_func(self, lookup: LookupFunc, dnsname: str, *expected: str) -> None:
        self.lookups.await_lookup_func(lookup, dnsname, *expected)

    def await_lookup(self, dnsname: str, *expected: str) -> None:
        self.lookups.await_lookup(dnsname, *expected)

    def await_lookup_txt(self, dnsname: str, *expected: str) -> None:
        self.lookups.await_lookup_txt(dnsname, *expected)

    def await_lookup_cname(self, dnsname: str, target: str) -> None:
        self.lookups.await_lookup_cname(dnsname, target)
