from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import ScriptError
from .exit_codes import ERR_VALIDATION
from .resources import ResourceKind, find_kind


@dataclass(frozen=True)
class ManifestResource:
    kind: str
    name: str

    @property
    def resource_kind(self) -> ResourceKind | None:
        return find_kind(self.kind)


def read_manifest(path: Path) -> list[ManifestResource]:
    """List the objects declared in a (multi-document) YAML manifest."""
    try:
        docs = list(yaml.safe_load_all(path.read_text(encoding="utf-8")))
    except OSError as exc:
        raise ScriptError(f"cannot read manifest {path}: {exc}", ERR_VALIDATION, kind="manifest_error") from exc
    except yaml.YAMLError as exc:
        raise ScriptError(f"invalid YAML in manifest {path}: {exc}", ERR_VALIDATION, kind="manifest_error") from exc
    out: list[ManifestResource] = []
    for index, doc in enumerate(docs):
        if doc is None:
            continue
        if not isinstance(doc, dict):
            raise ScriptError(f"{path}: document {index} is not a mapping", ERR_VALIDATION, kind="manifest_error")
        items = doc.get("items") if doc.get("kind") == "List" else [doc]
        if items is None:
            continue
        if not isinstance(items, list):
            raise ScriptError(f"{path}: document {index} items is not a list", ERR_VALIDATION, kind="manifest_error")
        for item in items:
            if not isinstance(item, dict):
                raise ScriptError(f"{path}: document {index} has an item that is not a mapping", ERR_VALIDATION, kind="manifest_error")
            metadata = item.get("metadata") or {}
            if not isinstance(metadata, dict):
                raise ScriptError(f"{path}: document {index} metadata is not a mapping", ERR_VALIDATION, kind="manifest_error")
            kind = item.get("kind")
            name = metadata.get("name")
            if not kind or not name:
                raise ScriptError(f"{path}: document {index} lacks kind or metadata.name", ERR_VALIDATION, kind="manifest_error")
            out.append(ManifestResource(kind=str(kind), name=str(name)))
    return out


def names_by_kind(resources: list[ManifestResource]) -> dict[ResourceKind, list[str]]:
    grouped: dict[ResourceKind, list[str]] = {}
    for res in resources:
        kind = res.resource_kind
        if kind is None:
            continue
        grouped.setdefault(kind, []).append(res.name)
    return grouped
