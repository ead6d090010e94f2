from __future__ import annotations

import json
from typing import Any

from convergekit.core.schema import schema_errors
from convergekit.errors import ProbeError

LIST_SCHEMA = "convergekit.list.v1"


def to_item_map(output: str) -> dict[str, dict[str, Any]]:
    """Decode a ``kubectl get -o json`` listing into ``{metadata.name: item}``."""
    try:
        payload = json.loads(output)
    except json.JSONDecodeError as exc:
        raise ProbeError(f"cannot decode listing: {exc}") from exc
    if not isinstance(payload, dict) or payload.get("kind") != "List":
        raise ProbeError("result is not a list")
    errors = schema_errors(LIST_SCHEMA, payload)
    if errors:
        raise ProbeError(f"malformed listing at {errors[0]}")
    return {item["metadata"]["name"]: item for item in payload["items"]}
