from __future__ import annotations

from pathlib import Path

from convergekit.core.config import HarnessConfig
from convergekit.core.logging import log_verbose
from convergekit.errors import ProbeError

from ._base import CliAdapter


class KubectlProvider:
    """Namespace-scoped ``kubectl`` runner used as the resource query provider."""

    def __init__(self, config: HarnessConfig) -> None:
        self.config = config
        self._cli = CliAdapter(config.kubectl_bin)

    def _run(self, *args: str) -> str:
        full = ("-n", self.config.namespace, *args)
        result = self._cli.run(self.config, *full)
        if result.code != 0:
            if result.stderr:
                log_verbose(self.config, result.stderr)
            cmdline = " ".join([self.config.kubectl_bin, *full])
            detail = result.stderr.strip() or f"exit code {result.code}"
            raise ProbeError(f"command `{cmdline}` failed with {detail}")
        return result.stdout

    def run_query(self, kind: str, output_format: str) -> str:
        return self._run("get", kind, output_format)

    def apply(self, path: Path | str) -> str:
        output = self._run("apply", "-f", str(path))
        log_verbose(self.config, output)
        return output

    def delete(self, path: Path | str) -> str:
        output = self._run("delete", "-f", str(path))
        log_verbose(self.config, output)
        return output
