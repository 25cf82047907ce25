"""
README.md generation: a Markdown table of every catalog server.
"""

from .catalog import ServerRecord


_HEADER = """\
# MCP Servers

A curated collection of Model Context Protocol (MCP) servers for various services and tools.

To add a server, see the [Contributing Guidelines](CONTRIBUTING.md).

| Server | Description | Install |
|--------|-------------|---------|
"""

_FOOTER = """
## Setup

Each server has its own configuration requirements. Refer to the individual server documentation for specific setup instructions.
"""

_BUTTON_STYLE = (
    "border: 1px solid rgba(128, 128, 128, 0.5); padding: 4px 8px; "
    "text-decoration: none; border-radius: 4px; font-size: 12px;"
)


def _cell(text: str) -> str:
    """Make text safe inside a single Markdown table cell."""
    return " ".join(text.split()).replace("|", "\\|")


def render_row(record: ServerRecord) -> str:
    button = ""
    if record.install_link:
        button = f'<a href="{record.install_link}" style="{_BUTTON_STYLE}">Install</a>'
    return f"| **{_cell(record.name)}** | {_cell(record.description)} | {button} |\n"


def render_readme(records: list[ServerRecord]) -> str:
    """Return README.md content for the given records, in order."""
    return _HEADER + "".join(render_row(r) for r in records) + _FOOTER
