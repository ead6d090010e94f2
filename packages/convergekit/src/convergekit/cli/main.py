from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .. import __version__
from ..core.config import HarnessConfig, default_run_id, parse_duration
from ..core.logging import log_event
from ..errors import ScriptError
from ..exit_codes import ERR_INTERNAL, ERR_SKIPPED, ERR_USAGE, OK
from ..harness import ConvergenceHarness
from ..resources import STATE_DELETED, kind_name, normalize_state, state_label
from .output import build_base_payload, emit, render_error


def _duration(raw: str) -> float:
    try:
        return parse_duration(raw)
    except ScriptError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="convergekit", description="await convergence of DNS controller resources")
    p.add_argument("--version", action="version", version=f"convergekit {__version__}")
    p.add_argument("--json", action="store_true", help="emit compact JSON output")
    p.add_argument("--config", help="YAML harness configuration file")
    p.add_argument("--namespace", "-n", help="namespace for kubectl queries")
    p.add_argument("--await-timeout", type=_duration, help="timeout for resource state checks (e.g. 30s)")
    p.add_argument("--lookup-timeout", type=_duration, help="timeout for DNS lookup checks (e.g. 7m)")
    p.add_argument("--polling-period", type=_duration, help="delay between polls (e.g. 200ms)")
    p.add_argument("--dns-server", help="nameserver used for DNS checks")
    p.add_argument("--run-id", help="run identifier attached to log events")
    p.add_argument("--quiet", action="store_true", help="disable verbose command output")
    p.add_argument("--log-json", action="store_true", help="emit log events as JSON lines")
    sub = p.add_subparsers(dest="cmd", required=True)

    state_p = sub.add_parser("await-state", help="wait until resources reach a state")
    state_p.add_argument("kind", help="resource kind, e.g. dnse or dnspr")
    state_p.add_argument("state", help="expected state, e.g. Ready, Error or deleted")
    state_p.add_argument("names", nargs="+")

    list_p = sub.add_parser("list", help="list resource names of a kind")
    list_p.add_argument("kind")

    apply_p = sub.add_parser("apply", help="apply a manifest file")
    apply_p.add_argument("file")
    apply_p.add_argument("--wait", metavar="STATE", help="await this state for the manifest's resources")

    delete_p = sub.add_parser("delete", help="delete a manifest file")
    delete_p.add_argument("file")
    delete_p.add_argument("--wait", action="store_true", help="await deletion of the manifest's resources")

    lookup_p = sub.add_parser("lookup", help="wait until a DNS name resolves to the expected values")
    lookup_p.add_argument("name")
    lookup_p.add_argument("expected", nargs="*")
    mode = lookup_p.add_mutually_exclusive_group()
    mode.add_argument("--txt", action="store_true", help="compare TXT records instead of addresses")
    mode.add_argument("--cname", metavar="TARGET", help="expect the addresses TARGET resolves to")
    lookup_p.add_argument("--private-dns", action="store_true", help="name lives in a private zone")
    return p


def resolve_config(ns: argparse.Namespace) -> HarnessConfig:
    config = HarnessConfig(run_id=default_run_id())
    if ns.config:
        config = HarnessConfig.from_yaml(Path(ns.config), config)
    config = HarnessConfig.from_env(base=config)
    return config.with_overrides(
        namespace=ns.namespace,
        await_timeout=ns.await_timeout,
        lookup_timeout=ns.lookup_timeout,
        polling_period=ns.polling_period,
        dns_server=ns.dns_server,
        run_id=ns.run_id,
        verbose=(False if ns.quiet else None),
        log_json=(True if ns.log_json else None),
    )


def build_harness(config: HarnessConfig) -> ConvergenceHarness:
    return ConvergenceHarness(config)


def _run(ns: argparse.Namespace, harness: ConvergenceHarness) -> int:
    config = harness.config
    as_json = bool(ns.json)
    if ns.cmd == "await-state":
        expected = normalize_state(ns.state)
        harness.await_state(ns.kind, expected, *ns.names)
        emit(
            {
                **build_base_payload(config, "await-state"),
                "resource": kind_name(ns.kind),
                "state": state_label(expected),
                "names": list(ns.names),
            },
            as_json,
        )
        return OK
    if ns.cmd == "list":
        items = harness.get_all(ns.kind)
        emit({**build_base_payload(config, "list"), "resource": kind_name(ns.kind), "names": sorted(items)}, as_json)
        return OK
    if ns.cmd == "apply":
        harness.apply(ns.file)
        awaited = harness.await_manifest(Path(ns.file), normalize_state(ns.wait)) if ns.wait else {}
        emit({**build_base_payload(config, "apply"), "file": ns.file, "awaited": awaited}, as_json)
        return OK
    if ns.cmd == "delete":
        harness.delete(ns.file)
        awaited = harness.await_manifest(Path(ns.file), STATE_DELETED) if ns.wait else {}
        emit({**build_base_payload(config, "delete"), "file": ns.file, "awaited": awaited}, as_json)
        return OK
    if ns.cmd == "lookup":
        if ns.cname and (ns.expected or ns.txt):
            raise ScriptError("--cname cannot be combined with EXPECTED values or --txt", ERR_USAGE, kind="usage_error")
        if not ns.cname and not ns.expected:
            raise ScriptError("lookup requires expected values or --cname", ERR_USAGE, kind="usage_error")
        if not harness.can_lookup(ns.private_dns):
            emit({**build_base_payload(config, "lookup", status="skipped"), "name": ns.name, "reason": "dns lookups not testable"}, as_json)
            return ERR_SKIPPED
        if ns.cname:
            harness.await_lookup_cname(ns.name, ns.cname)
        elif ns.txt:
            harness.await_lookup_txt(ns.name, *ns.expected)
        else:
            harness.await_lookup(ns.name, *ns.expected)
        emit(
            {
                **build_base_payload(config, "lookup"),
                "name": ns.name,
                "record": "TXT" if ns.txt else "A/AAAA",
                "expected": sorted(ns.expected),
                "cname": ns.cname,
            },
            as_json,
        )
        return OK
    raise ScriptError(f"unknown command: {ns.cmd}", ERR_USAGE, kind="usage_error")


def main(argv: list[str] | None = None) -> int:
    ns = build_parser().parse_args(argv)
    as_json = bool(ns.json)
    try:
        config = resolve_config(ns)
        log_event(config, "debug", "cli", "start", cmd=ns.cmd, namespace=config.namespace)
        return _run(ns, build_harness(config))
    except ScriptError as exc:
        print(render_error(as_json=as_json, message=str(exc), code=exc.code, kind=exc.kind), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        print(render_error(as_json=as_json, message=f"internal error: {exc}", code=ERR_INTERNAL), file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
