from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from convergekit.core.config import HarnessConfig
from convergekit.core.process import CommandResult, run_command


class QueryProvider(Protocol):
    def run_query(self, kind: str, output_format: str) -> str: ...


class ManifestProvider(QueryProvider, Protocol):
    def apply(self, path: Path | str) -> str: ...

    def delete(self, path: Path | str) -> str: ...


class Resolver(Protocol):
    def lookup_host(self, name: str) -> list[str]: ...

    def lookup_txt(self, name: str) -> list[str]: ...


@dataclass(frozen=True)
class CliAdapter:
    bin_name: str

    def run(self, config: HarnessConfig, *args: str) -> CommandResult:
        return run_command([self.bin_name, *[str(a) for a in args]], config.command_timeout, config=config)
