"""Manifest parsing and loading tests."""

import asyncio

import pytest

from lumadocs.content.fetcher import DocumentFetchError
from lumadocs.content.manifest import (
    ManifestLoadError,
    display_name,
    load_manifest,
    parse_manifest,
)
from lumadocs.content.schemas import ManifestFolder


def test_parse_manifest_flattens_folders_in_order() -> None:
    """Folder contents appear in place when flattened."""
    manifest = parse_manifest(
        {
            "documents": [
                "introduction",
                {"folder": "Language", "documents": ["language/variables", "language/functions"]},
                {"id": "memory/allocation", "title": "Memory Allocation"},
            ]
        }
    )
    assert [d.id for d in manifest.documents()] == [
        "introduction",
        "language/variables",
        "language/functions",
        "memory/allocation",
    ]
    assert isinstance(manifest.entries[1], ManifestFolder)
    assert manifest.documents()[1].folder == "Language"
    assert manifest.find("memory/allocation").title == "Memory Allocation"


def test_parse_manifest_accepts_bare_list() -> None:
    """A top-level list is treated as the document list."""
    manifest = parse_manifest(["a", "b"])
    assert [d.id for d in manifest.documents()] == ["a", "b"]


def test_display_name_from_id() -> None:
    """Display names are derived from the last id segment."""
    assert display_name("language/control-flow") == "Control Flow"
    assert display_name("getting_started") == "Getting Started"


@pytest.mark.parametrize(
    "data",
    [
        {"documents": "introduction"},
        {"documents": []},
        {"documents": ["a", "a"]},
        {"documents": ["../secrets"]},
        {"documents": [{"folder": "Empty"}]},
        {"documents": [42]},
    ],
)
def test_parse_manifest_rejects_invalid(data: object) -> None:
    """Malformed manifests raise ManifestLoadError."""
    with pytest.raises(ManifestLoadError):
        parse_manifest(data)


def test_load_manifest_reads_yaml(memory_fetcher) -> None:
    """The manifest file is fetched and parsed."""
    fetcher = memory_fetcher({"manifest.yaml": "documents:\n  - intro\n  - guide\n"})
    manifest = asyncio.run(load_manifest(fetcher, "manifest.yaml"))
    assert [d.id for d in manifest.documents()] == ["intro", "guide"]


def test_load_manifest_invalid_yaml(memory_fetcher) -> None:
    """Unparseable YAML is a load failure."""
    fetcher = memory_fetcher({"manifest.yaml": "documents: [unclosed\n"})
    with pytest.raises(ManifestLoadError):
        asyncio.run(load_manifest(fetcher, "manifest.yaml"))


def test_load_manifest_falls_back_to_readme(memory_fetcher) -> None:
    """Without a manifest the first well-known document is used."""
    fetcher = memory_fetcher({"README": "# Luma\n"})
    manifest = asyncio.run(load_manifest(fetcher, "manifest.yaml"))
    assert [d.id for d in manifest.documents()] == ["README"]
    assert fetcher.fetched == ["docs", "DOCS", "README"]


def test_load_manifest_without_any_source_fails(memory_fetcher) -> None:
    """No manifest and no fallback document is fatal."""
    fetcher = memory_fetcher({})
    with pytest.raises(ManifestLoadError):
        asyncio.run(load_manifest(fetcher, "manifest.yaml"))


def test_load_manifest_fetch_failure_is_fatal(memory_fetcher) -> None:
    """A manifest that exists but cannot be read is not replaced by a fallback."""

    class BrokenManifest(memory_fetcher):
        async def read_file(self, name: str) -> str:
            raise DocumentFetchError("timeout", name)

    with pytest.raises(ManifestLoadError):
        asyncio.run(load_manifest(BrokenManifest({"docs": "# Docs\n"}), "manifest.yaml"))
