"""
Static HTML preview of the catalog, rendered in light and dark themes
side by side so icon coloring can be checked before publishing.
"""

import html

from .catalog import CatalogReport, GroupResult, ServerRecord


_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>MCP Servers Preview</title>
  <style>
    * {{ box-sizing: border-box; }}
    body {{
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
      margin: 0;
      padding: 2rem;
      line-height: 1.6;
    }}
    .preview-container {{ display: flex; gap: 0; max-width: 1800px; margin: 0 auto; }}
    .preview-pane {{ flex: 1; min-width: 0; padding: 0 1rem; }}
    .preview-pane:first-child {{ border-right: 1px solid #d0d7de; }}
    .preview-pane h2 {{
      font-size: 0.875rem; font-weight: 600; margin: 0 0 1rem 0;
      text-transform: uppercase; letter-spacing: 0.05em;
    }}
    .light-mode {{ background: #ffffff; color: #24292f; }}
    .dark-mode {{ background: #0d1117; color: #c9d1d9; }}
    .light-mode h2, .light-mode .subtitle, .light-mode th {{ color: #57606a; }}
    .dark-mode h2, .dark-mode .subtitle, .dark-mode th {{ color: #8b949e; }}
    .light-mode table {{ border-color: #d0d7de; }}
    .dark-mode table {{ border-color: #21262d; }}
    .light-mode tr:hover {{ background: rgba(0,0,0,0.03); }}
    .dark-mode tr:hover {{ background: rgba(255,255,255,0.03); }}
    .light-mode .server-icon {{ background: #eaeef2; }}
    .dark-mode .server-icon {{ background: #30363d; }}
    .light-mode .server-name {{ color: #0969da; }}
    .dark-mode .server-name {{ color: #58a6ff; }}
    .light-mode .install-btn {{ border-color: rgba(0,0,0,0.2); color: #0969da; }}
    .light-mode .install-btn:hover {{ background: rgba(9, 105, 218, 0.08); }}
    .dark-mode .install-btn {{ border-color: rgba(128, 128, 128, 0.5); color: #58a6ff; }}
    .dark-mode .install-btn:hover {{ background: rgba(88, 166, 255, 0.1); }}
    h1 {{ font-size: 1.5rem; margin-bottom: 0.5rem; }}
    .subtitle {{ font-size: 0.9rem; margin-bottom: 1.5rem; }}
    table {{ width: 100%; border-collapse: collapse; font-size: 14px; }}
    th, td {{ padding: 12px 16px; text-align: left; border-bottom: 1px solid; vertical-align: top; }}
    th {{ font-weight: 500; }}
    .server-cell {{ display: flex; align-items: center; gap: 12px; }}
    .server-icon {{
      width: 24px; height: 24px; flex-shrink: 0; border-radius: 6px; overflow: hidden;
      display: flex; align-items: center; justify-content: center;
    }}
    .server-icon img {{ width: 100%; height: 100%; object-fit: contain; }}
    .dark-mode .server-icon img {{ filter: invert(1) brightness(2); }}
    .install-btn {{
      display: inline-block; padding: 4px 12px; font-size: 12px;
      border: 1px solid; border-radius: 4px;
      text-decoration: none; white-space: nowrap;
    }}
    .group-details .server-row {{ margin: 4px 0; }}
  </style>
</head>
<body>
  <h1>MCP Servers</h1>
  <p class="subtitle">Preview · {count} servers · Light mode (left) · Dark mode (right)</p>
  <div class="preview-container">
    <div class="preview-pane light-mode">
      <h2>Light mode</h2>
      {table}
    </div>
    <div class="preview-pane dark-mode">
      <h2>Dark mode</h2>
      {table}
    </div>
  </div>
</body>
</html>
"""

_TABLE_TEMPLATE = """\
<table>
        <thead><tr><th>Server</th><th>Description</th><th>Install</th></tr></thead>
        <tbody>{rows}</tbody>
      </table>"""

_SERVER_ROW_TEMPLATE = """
        <tr>
          <td><div class="server-cell"><div class="server-icon"><img src="{icon}" alt="" onerror="this.parentElement.innerHTML=''"></div><span class="server-name">{name}</span></div></td>
          <td>{description}</td>
          <td>{install}</td>
        </tr>"""

_GROUP_ROW_TEMPLATE = """
        <tr>
          <td><span class="server-name">{label}</span></td>
          <td colspan="2">
            <details>
              <summary>{summary}</summary>
              <div class="group-details">{members}</div>
            </details>
          </td>
        </tr>"""


def _install_button(record: ServerRecord) -> str:
    if not record.install_link:
        return ""
    return f'<a href="{html.escape(record.install_link)}" class="install-btn">Install</a>'


def _server_row(record: ServerRecord, icon_root: str) -> str:
    icon = f"{icon_root.rstrip('/')}/{record.icon_path}" if icon_root else record.icon_path
    return _SERVER_ROW_TEMPLATE.format(
        icon=html.escape(icon),
        name=html.escape(record.name),
        description=html.escape(record.description),
        install=_install_button(record) or "-",
    )


def _group_row(group: GroupResult) -> str:
    records = group.records
    members = "".join(
        f'<div class="server-row">• <strong>{html.escape(r.name)}</strong> - '
        f"{html.escape(r.description)} {_install_button(r)}</div>"
        for r in records
    )
    count = len(records)
    return _GROUP_ROW_TEMPLATE.format(
        label=html.escape(group.label),
        summary=f"{count} server{'s' if count != 1 else ''}",
        members=members,
    )


def render_rows(report: CatalogReport, icon_root: str) -> str:
    """Table body rows in manifest order; empty groups are left out."""
    rows: list[str] = []
    for item in report.visible_items():
        if isinstance(item, GroupResult):
            rows.append(_group_row(item))
        else:
            rows.append(_server_row(item, icon_root))
    return "".join(rows)


def render_preview(report: CatalogReport, icon_root: str = "../servers") -> str:
    """Return the full preview document.

    icon_root is the catalog directory as seen from the output file
    (icons are referenced, not embedded).
    """
    table = _TABLE_TEMPLATE.format(rows=render_rows(report, icon_root))
    return _HTML_TEMPLATE.format(count=len(report.records()), table=table)
