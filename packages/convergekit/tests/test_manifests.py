from __future__ import annotations

from pathlib import Path

import pytest
from convergekit.errors import ScriptError
from convergekit.manifests import ManifestResource, names_by_kind, read_manifest
from convergekit.resources import DNS_ENTRY, DNS_PROVIDER

from tests.helpers import FakeProvider, make_harness

MANIFEST = """\
apiVersion: dns.gardener.cloud/v1alpha1
kind: DNSProvider
metadata:
  name: aws-route53
spec:
  type: aws-route53
---
apiVersion: v1
kind: Secret
metadata:
  name: aws-credentials
---
apiVersion: v1
kind: List
items:
  - apiVersion: dns.gardener.cloud/v1alpha1
    kind: DNSEntry
    metadata:
      name: e1
      namespace: dns-test
  - apiVersion: dns.gardener.cloud/v1alpha1
    kind: DNSEntry
    metadata:
      name: e2
---
"""


def test_read_manifest_flattens_lists_and_skips_empty_docs(tmp_path: Path) -> None:
    path = tmp_path / "entries.yaml"
    path.write_text(MANIFEST, encoding="utf-8")

    resources = read_manifest(path)

    assert resources == [
        ManifestResource("DNSProvider", "aws-route53"),
        ManifestResource("Secret", "aws-credentials"),
        ManifestResource("DNSEntry", "e1"),
        ManifestResource("DNSEntry", "e2"),
    ]


def test_names_by_kind_keeps_only_modelled_kinds(tmp_path: Path) -> None:
    path = tmp_path / "entries.yaml"
    path.write_text(MANIFEST, encoding="utf-8")

    grouped = names_by_kind(read_manifest(path))

    assert grouped == {DNS_PROVIDER: ["aws-route53"], DNS_ENTRY: ["e1", "e2"]}


def test_document_without_name_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("kind: DNSEntry\nmetadata: {}\n", encoding="utf-8")
    with pytest.raises(ScriptError, match="lacks kind or metadata.name"):
        read_manifest(path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("kind: [unterminated\n", encoding="utf-8")
    with pytest.raises(ScriptError, match="invalid YAML"):
        read_manifest(path)


def test_scalar_document_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("just a string\n", encoding="utf-8")
    with pytest.raises(ScriptError, match="not a mapping"):
        read_manifest(path)


@pytest.mark.parametrize(
    ("body", "message"),
    [
        ("kind: List\nitems:\n  - just-a-string\n", "item that is not a mapping"),
        ("kind: List\nitems:\n  e1: {}\n", "items is not a list"),
        ("kind: DNSEntry\nmetadata: e1\n", "metadata is not a mapping"),
    ],
)
def test_malformed_list_items_are_rejected(tmp_path: Path, body: str, message: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ScriptError, match=message) as excinfo:
        read_manifest(path)
    assert excinfo.value.kind == "manifest_error"


def test_awaiting_malformed_list_manifest_is_a_manifest_error(tmp_path: Path) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text("kind: List\nitems:\n  - just-a-string\n", encoding="utf-8")
    harness = make_harness(FakeProvider({"dnse": ["a=Ready"]}))

    with pytest.raises(ScriptError) as excinfo:
        harness.await_manifest(path, "Ready")
    assert excinfo.value.kind == "manifest_error"
