"""CLI payload output helpers."""

from __future__ import annotations

import json

from ..core.config import HarnessConfig


def dumps_json(payload: object, pretty: bool = False) -> str:
    if pretty:
        return json.dumps(payload, indent=2, sort_keys=True)
    return json.dumps(payload, sort_keys=True)


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def build_base_payload(config: HarnessConfig, kind: str, status: str = "ok") -> dict[str, object]:
    return {
        "schema_name": "convergekit.result.v1",
        "schema_version": 1,
        "tool": "convergekit",
        "kind": kind,
        "status": status,
        "run_id": config.run_id,
        "namespace": config.namespace,
    }


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error") -> str:
    if as_json:
        return dumps_json(
            {
                "schema_name": "convergekit.error.v1",
                "schema_version": 1,
                "tool": "convergekit",
                "status": "error",
                "errors": [{"code": code, "kind": kind, "message": message}],
            },
            pretty=False,
        )
    return message
