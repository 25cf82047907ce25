"""
Catalog reading: manifest entries, server descriptors, derived records.

The catalog is a directory of per-server subfolders (server.json + icon.svg)
indexed by an ordered manifest, index.json.  Every entry is loaded
independently; a broken entry becomes a skipped EntryResult instead of
aborting the run.
"""

import json
import os

from .links import generate_install_link


MANIFEST_NAME = "index.json"
DESCRIPTOR_NAME = "server.json"
ICON_NAME = "icon.svg"


class CatalogError(Exception):
    """Base class for catalog read failures."""


class ManifestError(CatalogError):
    """The manifest is missing, unreadable, or not a JSON array."""


class DescriptorError(CatalogError):
    """A server's server.json could not be loaded or is incomplete."""


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

class ManifestEntry:
    """A single server listed directly in the manifest."""
    def __init__(self, server_id: str):
        self.server_id = server_id

    def __repr__(self) -> str:
        return f"ManifestEntry({self.server_id!r})"


class ManifestGroup:
    """A labelled group of servers: ["Label", ["id1", "id2"]]."""
    def __init__(self, label: str, server_ids: list[str]):
        self.label = label
        self.server_ids = server_ids

    def __repr__(self) -> str:
        return f"ManifestGroup({self.label!r}, {self.server_ids!r})"


class MalformedEntry:
    """A manifest element that is neither an id nor a [label, ids] pair."""
    def __init__(self, raw):
        self.raw = raw

    @property
    def server_id(self) -> str:
        return json.dumps(self.raw)


def _parse_manifest_item(item):
    if isinstance(item, str):
        return ManifestEntry(item)
    if (
        isinstance(item, list)
        and len(item) == 2
        and isinstance(item[0], str)
        and isinstance(item[1], list)
        and all(isinstance(s, str) for s in item[1])
    ):
        return ManifestGroup(item[0], list(item[1]))
    return MalformedEntry(item)


def load_manifest(servers_dir: str) -> list:
    """Read index.json and return its entries in display order.

    Raises ManifestError when the file cannot be read or is not a JSON
    array.  Individual elements of the wrong shape come back as
    MalformedEntry so callers can skip them.
    """
    path = os.path.join(servers_dir, MANIFEST_NAME)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ManifestError(f"cannot read {path}: {e}") from e
    except ValueError as e:
        raise ManifestError(f"invalid JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise ManifestError(f"{path} must contain a JSON array")
    return [_parse_manifest_item(item) for item in data]


def iter_server_dirs(servers_dir: str) -> list[str]:
    """List server ids by directory scan (sorted), skipping the manifest."""
    ids = []
    for name in sorted(os.listdir(servers_dir)):
        if name == MANIFEST_NAME:
            continue
        if os.path.isdir(os.path.join(servers_dir, name)):
            ids.append(name)
    return ids


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

def _check_server_id(server_id: str) -> None:
    if (
        not server_id
        or server_id in (".", "..")
        or "/" in server_id
        or "\\" in server_id
    ):
        raise DescriptorError(f"invalid server id: {server_id!r}")


def load_descriptor(servers_dir: str, server_id: str) -> dict:
    """Load and validate servers/<id>/server.json."""
    _check_server_id(server_id)
    path = os.path.join(servers_dir, server_id, DESCRIPTOR_NAME)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise DescriptorError(f"cannot read {path}: {e.strerror or e}") from e
    except ValueError as e:
        raise DescriptorError(f"invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise DescriptorError(f"{DESCRIPTOR_NAME} is not a JSON object")
    for key in ("name", "description"):
        if not isinstance(data.get(key), str):
            raise DescriptorError(f"missing or non-string '{key}'")
    config = data.get("config")
    if config is not None and not isinstance(config, dict):
        raise DescriptorError("'config' must be an object")
    return data


# ---------------------------------------------------------------------------
# Derived records and per-entry results
# ---------------------------------------------------------------------------

class ServerRecord:
    """Display projection of one server: what the generators render."""
    def __init__(self, server_id: str, name: str, description: str, install_link: str):
        self.server_id = server_id
        self.name = name
        self.description = description
        self.install_link = install_link
        self.icon_path = f"{server_id}/{ICON_NAME}"


class EntryResult:
    """Outcome of loading one server: a record, or the reason it was skipped."""
    def __init__(self, server_id: str, record: ServerRecord | None = None, reason: str | None = None):
        self.server_id = server_id
        self.record = record
        self.reason = reason

    @property
    def ok(self) -> bool:
        return self.record is not None


class GroupResult:
    """A manifest group with the results for each member, in order."""
    def __init__(self, label: str, results: list[EntryResult]):
        self.label = label
        self.results = results

    @property
    def records(self) -> list[ServerRecord]:
        return [r.record for r in self.results if r.ok]


class CatalogReport:
    """Ordered per-entry outcomes of one catalog read."""
    def __init__(self, items: list):
        self.items = items   # EntryResult | GroupResult, manifest order

    def records(self) -> list[ServerRecord]:
        """All loaded records with groups flattened in place."""
        out: list[ServerRecord] = []
        for item in self.items:
            if isinstance(item, GroupResult):
                out.extend(item.records)
            elif item.ok:
                out.append(item.record)
        return out

    def skipped(self) -> list[tuple[str, str]]:
        out: list[tuple[str, str]] = []
        for item in self.items:
            results = item.results if isinstance(item, GroupResult) else [item]
            for r in results:
                if not r.ok:
                    out.append((r.server_id, r.reason))
        return out

    def visible_items(self) -> list:
        """Items worth rendering: loaded entries and non-empty groups.

        Flat entries come back as ServerRecord, groups as GroupResult.
        """
        out = []
        for item in self.items:
            if isinstance(item, GroupResult):
                if item.records:
                    out.append(item)
            elif item.ok:
                out.append(item.record)
        return out


def load_entry(servers_dir: str, server_id: str, prompt_links: bool = False) -> EntryResult:
    """Load one server and derive its record; never raises for bad entries."""
    try:
        descriptor = load_descriptor(servers_dir, server_id)
    except DescriptorError as e:
        return EntryResult(server_id, reason=str(e))

    prompt = descriptor.get("prompt") if prompt_links else None
    link = generate_install_link(server_id, descriptor.get("config"), prompt)
    record = ServerRecord(server_id, descriptor["name"], descriptor["description"], link)
    return EntryResult(server_id, record=record)


def load_catalog(servers_dir: str, prompt_links: bool = False) -> CatalogReport:
    """Read the manifest and every descriptor it names.

    prompt_links: give prompt-only servers (no config) a name-only
    install link.  The README wants this; the preview does not.

    Raises ManifestError; per-entry problems land in the report.
    """
    items = []
    for entry in load_manifest(servers_dir):
        if isinstance(entry, ManifestEntry):
            items.append(load_entry(servers_dir, entry.server_id, prompt_links))
        elif isinstance(entry, ManifestGroup):
            results = [load_entry(servers_dir, sid, prompt_links) for sid in entry.server_ids]
            items.append(GroupResult(entry.label, results))
        else:
            items.append(EntryResult(entry.server_id, reason="malformed manifest entry"))
    return CatalogReport(items)
