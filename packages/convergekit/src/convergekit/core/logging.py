from __future__ import annotations

import inspect
import json
import sys
from typing import TYPE_CHECKING

from .clock import utc_now_iso

if TYPE_CHECKING:
    from .config import HarnessConfig


def log_event(config: HarnessConfig, level: str, component: str, action: str, **fields: object) -> None:
    if level == "debug" and not config.verbose:
        return
    caller = inspect.stack(0)[1]
    payload = {
        "ts": utc_now_iso(),
        "level": level,
        "run_id": config.run_id,
        "component": component,
        "action": action,
        "file": caller.filename,
        "line": caller.lineno,
        **fields,
    }
    if config.log_json:
        sys.stderr.write(json.dumps(payload, sort_keys=True, default=str) + "\n")
        return
    core = f"ts={payload['ts']} level={level} run_id={config.run_id} component={component} action={action}"
    extras = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    sys.stderr.write((core if not extras else f"{core} {extras}") + "\n")


def log_verbose(config: HarnessConfig, output: str) -> None:
    if config.verbose:
        sys.stderr.write(output if output.endswith("\n") else output + "\n")
