from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from ..errors import ScriptError
from ..exit_codes import ERR_CONFIG
from . import schema
from .env import getenv, getenv_bool

DEFAULT_AWAIT_TIMEOUT = 30.0
# upstream resolvers may cache negative answers for several minutes
DEFAULT_LOOKUP_TIMEOUT = 420.0
DEFAULT_POLLING_PERIOD = 0.2
DEFAULT_NAMESPACE = "default"

_DURATION_RE = re.compile(r"^\s*([0-9]+(?:\.[0-9]+)?)\s*(ms|s|m|h)?\s*$")
_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(raw: object, field_name: str = "duration") -> float:
    """Return ``raw`` in seconds; numbers are seconds, strings may carry ms/s/m/h."""
    if isinstance(raw, bool):
        raise ScriptError(f"invalid {field_name}: {raw!r}", ERR_CONFIG, kind="config_error")
    if isinstance(raw, (int, float)):
        return float(raw)
    if isinstance(raw, str):
        match = _DURATION_RE.match(raw)
        if match:
            return float(match.group(1)) * _UNIT_SECONDS[match.group(2) or "s"]
    raise ScriptError(f"invalid {field_name}: {raw!r}", ERR_CONFIG, kind="config_error")


def default_run_id() -> str:
    return f"converge-{datetime.now(timezone.utc).strftime('%Y%m%d-%H%M%S')}"


@dataclass(frozen=True)
class HarnessConfig:
    await_timeout: float = DEFAULT_AWAIT_TIMEOUT
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
    polling_period: float = DEFAULT_POLLING_PERIOD
    namespace: str = DEFAULT_NAMESPACE
    verbose: bool = True
    dns_server: str | None = None
    log_json: bool = False
    run_id: str = "local"
    kubectl_bin: str = "kubectl"
    command_timeout: float = 0.0

    def __post_init__(self) -> None:
        if self.polling_period <= 0:
            raise ScriptError(f"polling_period must be > 0, got {self.polling_period}", ERR_CONFIG, kind="config_error")
        for name in ("await_timeout", "lookup_timeout", "command_timeout"):
            value = getattr(self, name)
            if value < 0:
                raise ScriptError(f"{name} must be >= 0, got {value}", ERR_CONFIG, kind="config_error")
        if not self.namespace:
            raise ScriptError("namespace must not be empty", ERR_CONFIG, kind="config_error")

    @property
    def dns_testable(self) -> bool:
        return bool(self.dns_server)

    def with_overrides(self, **overrides: Any) -> HarnessConfig:
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    @classmethod
    def create_default(cls, dns_server: str | None = None) -> HarnessConfig:
        return cls(dns_server=dns_server or None, run_id=default_run_id())

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: HarnessConfig | None = None) -> HarnessConfig:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ScriptError(f"unknown config keys: {', '.join(unknown)}", ERR_CONFIG, kind="config_error")
        values: dict[str, Any] = {}
        for key, raw in data.items():
            if key in {"await_timeout", "lookup_timeout", "polling_period", "command_timeout"}:
                values[key] = parse_duration(raw, key)
            else:
                values[key] = raw
        return replace(base or cls(run_id=default_run_id()), **values)

    @classmethod
    def from_yaml(cls, path: Path, base: HarnessConfig | None = None) -> HarnessConfig:
        try:
            payload = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except OSError as exc:
            raise ScriptError(f"cannot read config {path}: {exc}", ERR_CONFIG, kind="config_error") from exc
        except yaml.YAMLError as exc:
            raise ScriptError(f"invalid YAML in config {path}: {exc}", ERR_CONFIG, kind="config_error") from exc
        schema.validate("convergekit.config.v1", payload)
        return cls.from_mapping(payload, base)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, base: HarnessConfig | None = None) -> HarnessConfig:
        current = base or cls(run_id=default_run_id())
        values: dict[str, Any] = {}
        for key, env_name in (
            ("await_timeout", "AWAIT_TIMEOUT"),
            ("lookup_timeout", "LOOKUP_TIMEOUT"),
            ("polling_period", "POLLING_PERIOD"),
        ):
            raw = getenv(env_name, None, environ)
            if raw:
                values[key] = parse_duration(raw, key)
        for key, env_name in (
            ("namespace", "NAMESPACE"),
            ("dns_server", "DNS_SERVER"),
            ("run_id", "RUN_ID"),
            ("kubectl_bin", "KUBECTL"),
        ):
            raw = getenv(env_name, None, environ)
            if raw:
                values[key] = raw
        values["verbose"] = getenv_bool("VERBOSE", current.verbose, environ)
        values["log_json"] = getenv_bool("LOG_JSON", current.log_json, environ)
        return replace(current, **values)
