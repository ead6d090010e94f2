from __future__ import annotations

from dataclasses import dataclass

STATE_READY = "Ready"
STATE_ERROR = "Error"
STATE_DELETED = "~DELETED~"


@dataclass(frozen=True)
class ResourceKind:
    name: str
    manifest_kind: str
    plural: str
    states: tuple[str, ...] = (STATE_READY, STATE_ERROR, STATE_DELETED)

    def __str__(self) -> str:
        return self.name


DNS_PROVIDER = ResourceKind("dnspr", "DNSProvider", "dnsproviders")
DNS_ENTRY = ResourceKind("dnse", "DNSEntry", "dnsentries")

KINDS: tuple[ResourceKind, ...] = (DNS_PROVIDER, DNS_ENTRY)


def find_kind(value: str) -> ResourceKind | None:
    needle = value.strip().lower()
    for kind in KINDS:
        if needle in {kind.name, kind.manifest_kind.lower(), kind.plural}:
            return kind
    return None


def kind_name(kind: ResourceKind | str) -> str:
    """Short kubectl resource name for a modelled kind or a bare resource name."""
    if isinstance(kind, ResourceKind):
        return kind.name
    known = find_kind(kind)
    return known.name if known else kind


def state_label(state: str) -> str:
    return "deleted" if state == STATE_DELETED else state


def normalize_state(raw: str) -> str:
    """Map the CLI spelling ``deleted`` onto the deleted sentinel."""
    return STATE_DELETED if raw.strip().lower() == "deleted" else raw
