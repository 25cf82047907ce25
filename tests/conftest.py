import base64
import json
import os
from urllib.parse import parse_qs, urlsplit

import pytest


def write_server(servers_dir, server_id, descriptor=None, icon=None):
    """Create servers/<id>/ with an optional server.json and icon.svg."""
    server_dir = os.path.join(servers_dir, server_id)
    os.makedirs(server_dir, exist_ok=True)
    if descriptor is not None:
        with open(os.path.join(server_dir, "server.json"), "w") as f:
            if isinstance(descriptor, str):
                f.write(descriptor)
            else:
                json.dump(descriptor, f)
    if icon is not None:
        mode = "wb" if isinstance(icon, bytes) else "w"
        with open(os.path.join(server_dir, "icon.svg"), mode) as f:
            f.write(icon)
    return server_dir


def write_manifest(servers_dir, entries):
    with open(os.path.join(servers_dir, "index.json"), "w") as f:
        json.dump(entries, f)


@pytest.fixture
def servers_dir(tmp_path):
    path = tmp_path / "servers"
    path.mkdir()
    return str(path)


@pytest.fixture
def catalog(servers_dir):
    """A small catalog: two flat servers, a group, one broken entry."""
    write_server(servers_dir, "github", {
        "name": "GitHub",
        "description": "Repos, issues and pull requests",
        "transport": ["stdio"],
        "config": {"command": "npx", "args": ["-y", "@modelcontextprotocol/server-github"]},
    }, icon='<svg><path fill="#000"/></svg>')
    write_server(servers_dir, "linear", {
        "name": "Linear",
        "description": "Issue tracking",
        "oauth": True,
        "config": {"url": "https://mcp.linear.app/sse"},
    })
    write_server(servers_dir, "zapier", {
        "name": "Zapier",
        "description": "Automate workflows",
        "prompt": "Paste your Zapier MCP URL",
    })
    write_server(servers_dir, "aws-docs", {
        "name": "AWS Docs",
        "description": "AWS documentation",
        "config": {"command": "uvx", "args": ["awslabs.aws-documentation-mcp-server@latest"]},
    })
    write_server(servers_dir, "broken", "{not json")
    write_manifest(servers_dir, [
        "github",
        ["AWS", ["aws-docs", "missing"]],
        "broken",
        "linear",
        "zapier",
    ])
    return servers_dir


def decode_install_config(link):
    """Decode the config half of an install link (None if absent)."""
    params = parse_qs(urlsplit(link).query)
    if "config" not in params:
        return None
    return json.loads(base64.b64decode(params["config"][0]).decode("utf-8"))
