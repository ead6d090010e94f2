"""DNS lookups against an explicit nameserver or the system resolver.

Lookups are exposed synchronously; each call drives its own event loop so the
convergence engine can treat the resolver like any other blocking probe.
"""

from __future__ import annotations

import asyncio
import socket

import aiodns

from convergekit.errors import ProbeError

DEFAULT_QUERY_TIMEOUT = 5.0


class DnsClient:
    def __init__(self, server: str | None = None, query_timeout: float = DEFAULT_QUERY_TIMEOUT) -> None:
        self.server = server or None
        self.query_timeout = query_timeout

    @property
    def configured(self) -> bool:
        return self.server is not None

    def lookup_host(self, name: str) -> list[str]:
        return asyncio.run(self._lookup_host(name))

    def lookup_txt(self, name: str) -> list[str]:
        return asyncio.run(self._lookup_txt(name))

    def _resolver(self) -> aiodns.DNSResolver:
        nameservers = [self.server] if self.server else None
        return aiodns.DNSResolver(nameservers=nameservers, timeout=self.query_timeout)

    async def _query(self, resolver: aiodns.DNSResolver, name: str, qtype: str) -> list:
        try:
            return await asyncio.wait_for(resolver.query(name, qtype), timeout=self.query_timeout + 1)
        except asyncio.TimeoutError as exc:
            raise ProbeError(f"lookup {qtype} {name}: timeout after {self.query_timeout}s") from exc
        except aiodns.error.DNSError as exc:
            raise ProbeError(f"lookup {qtype} {name}: {_dns_error_text(exc)}") from exc

    async def _lookup_host(self, name: str) -> list[str]:
        if not self.server:
            return await self._system_lookup_host(name)
        resolver = self._resolver()
        try:
            results = await asyncio.gather(
                self._query(resolver, name, "A"),
                self._query(resolver, name, "AAAA"),
                return_exceptions=True,
            )
        finally:
            await resolver.close()
        addresses: list[str] = []
        errors: list[ProbeError] = []
        for outcome in results:
            if isinstance(outcome, ProbeError):
                errors.append(outcome)
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            addresses.extend(record.host for record in outcome)
        if errors and not addresses:
            raise errors[0]
        return addresses

    async def _system_lookup_host(self, name: str) -> list[str]:
        loop = asyncio.get_running_loop()
        try:
            infos = await asyncio.wait_for(
                loop.getaddrinfo(name, 0, family=socket.AF_UNSPEC, type=socket.SOCK_STREAM),
                timeout=self.query_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise ProbeError(f"lookup {name}: timeout after {self.query_timeout}s") from exc
        except socket.gaierror as exc:
            raise ProbeError(f"lookup {name}: {exc}") from exc
        addresses: list[str] = []
        for _family, _type, _proto, _canonname, sockaddr in infos:
            addr = str(sockaddr[0])
            if addr not in addresses:
                addresses.append(addr)
        return addresses

    async def _lookup_txt(self, name: str) -> list[str]:
        resolver = self._resolver()
        try:
            records = await self._query(resolver, name, "TXT")
        finally:
            await resolver.close()
        out: list[str] = []
        for record in records:
            text = record.text
            out.append(text.decode("utf-8", errors="replace") if isinstance(text, bytes) else str(text))
        return out


def _dns_error_text(exc: aiodns.error.DNSError) -> str:
    if len(exc.args) >= 2:
        return str(exc.args[1])
    return str(exc)
