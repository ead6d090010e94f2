"""Centralized environment variable helpers."""

from __future__ import annotations

import os
from collections.abc import Mapping

ENV_PREFIX = "CONVERGEKIT_"


def getenv(name: str, default: str | None = None, environ: Mapping[str, str] | None = None) -> str | None:
    source = os.environ if environ is None else environ
    return source.get(f"{ENV_PREFIX}{name}", default)


def getenv_bool(name: str, default: bool, environ: Mapping[str, str] | None = None) -> bool:
    raw = getenv(name, None, environ)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}
