from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..errors import ScriptError
from ..exit_codes import ERR_VALIDATION

SCHEMAS_ROOT = Path(__file__).resolve().parents[1] / "schemas"


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    path = SCHEMAS_ROOT / f"{schema_name}.schema.json"
    return json.loads(path.read_text(encoding="utf-8"))


def schema_errors(schema_name: str, payload: Any) -> list[str]:
    validator = jsonschema.Draft202012Validator(load_schema(schema_name))
    errors: list[str] = []
    for exc in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path]):
        pointer = "/".join(str(p) for p in exc.absolute_path)
        errors.append(f"{pointer or '<root>'}: {exc.message}")
    return errors


def validate(schema_name: str, payload: Any) -> None:
    try:
        jsonschema.validate(payload, load_schema(schema_name))
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(
            f"schema validation failed for {schema_name} at {loc}: {exc.message}",
            ERR_VALIDATION,
            kind="schema_validation",
        ) from exc
