"""
Install deep links: https://cursor.com/en/install-mcp?name=...&config=...

The config query parameter is the server's connection config as compact
JSON, base64-encoded.  The install flow takes a single command string, so
command + args are merged before encoding.
"""

import base64
import json
import sys
from urllib.parse import quote


INSTALL_URL = "https://cursor.com/en/install-mcp"

# Characters encodeURIComponent leaves alone beyond quote()'s defaults.
_URI_COMPONENT_SAFE = "!~*'()"


def _encode_component(s: str) -> str:
    return quote(s, safe=_URI_COMPONENT_SAFE)


def _merge_command_args(config: dict) -> dict:
    merged = dict(config)
    # A null args is left in place, as if no args were given.
    if merged.get("command") and merged.get("args") is not None:
        args = merged.pop("args")
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise TypeError("'args' must be a list of strings")
        # Joined as a list so empty args leave the command without a trailing space.
        merged["command"] = " ".join([merged["command"], *args])
    return merged


def generate_install_link(server_id: str, config: dict | None, prompt: str | None = None) -> str:
    """Return the install link for a server, or "" when there is none.

    A server with no config gets a name-only link if it carries a prompt,
    otherwise no link.  Encoding failures are reported and yield "".
    """
    try:
        name = _encode_component(server_id)
        if config is None:
            if isinstance(prompt, str) and prompt:
                return f"{INSTALL_URL}?name={name}"
            return ""
        if not isinstance(config, dict):
            raise TypeError(f"config must be an object, got {type(config).__name__}")
        payload = json.dumps(_merge_command_args(config), separators=(",", ":"), ensure_ascii=False)
        b64 = base64.b64encode(payload.encode("utf-8")).decode("ascii")
    except (TypeError, ValueError) as e:
        # ValueError covers UnicodeEncodeError from lone surrogates.
        print(f"warning: failed to generate install link for {server_id!r}: {e}", file=sys.stderr)
        return ""

    return f"{INSTALL_URL}?name={name}&config={_encode_component(b64)}"
