"""
Icon color normalization: rewrite hard-coded SVG paint to currentColor.

Icons then inherit the surrounding text color and work in both light and
dark themes.  The rewrite is pattern-based (no XML parse) so that the rest
of the markup is preserved byte-for-byte.  "none" is never touched: it
means "do not paint", not a color.

Passes run in order; each is idempotent and none matches the output of
an earlier one:

  1. fill="..." / stroke="..." attributes
  2. .st0{fill:...;stroke:...} style-class rules
  3. inline fill: hex / rgb() / rgba() declarations
  4. url(#...) paint references (gradients, patterns)
  5. gradient stop-color declarations and attributes
"""

import os
import re
import sys

from .catalog import ICON_NAME, iter_server_dirs


SENTINEL = "currentColor"

MODIFIED = "modified"
UNMODIFIED = "unmodified"
NOT_SVG = "not-svg"

_KEEP_VALUES = {"none", SENTINEL.lower()}

_COLOR_VALUE = r"(?:#[0-9a-fA-F]{3,8}(?![0-9a-fA-F])|rgba?\([^)]*\))"


def _is_kept(value: str) -> bool:
    return value.strip().lower() in _KEEP_VALUES


# ---------------------------------------------------------------------------
# Pass 1: paint attributes
# ---------------------------------------------------------------------------

_ATTR_RES = {
    attr: re.compile(rf"""(?<![\w:-]){attr}\s*=\s*(["'])(.*?)\1""")
    for attr in ("fill", "stroke")
}


def rewrite_color_attribute(content: str, attr: str) -> str:
    """Set every attr="..." (attr is "fill" or "stroke") to currentColor."""
    def repl(m: re.Match) -> str:
        if _is_kept(m.group(2)):
            return m.group(0)
        quote = m.group(1)
        return f"{attr}={quote}{SENTINEL}{quote}"

    return _ATTR_RES[attr].sub(repl, content)


# ---------------------------------------------------------------------------
# Pass 2: style-class rules (.st0, .cls1 ... as emitted by Illustrator etc.)
# ---------------------------------------------------------------------------

_CLASS_SELECTOR = r"\.[A-Za-z]{1,4}\d+"
_CLASS_RULE_RE = re.compile(
    rf"({_CLASS_SELECTOR}(?:\s*,\s*{_CLASS_SELECTOR})*\s*\{{)([^}}]*)(\}})"
)
_PAINT_DECL_RE = re.compile(r"(?<![\w-])(fill|stroke)(\s*:\s*)([^;}]+)")
_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)


def _rewrite_paint_decls(body: str) -> str:
    def repl(m: re.Match) -> str:
        value = m.group(3)
        priority = _IMPORTANT_RE.search(value)
        color = value[:priority.start()] if priority else value
        if _is_kept(color):
            return m.group(0)
        # Keep whitespace that preceded the next ';' or '}'.
        trailing = value[len(value.rstrip()):]
        if priority:
            trailing = priority.group(0).rstrip() + trailing
        return f"{m.group(1)}:{SENTINEL}{trailing}"

    return _PAINT_DECL_RE.sub(repl, body)


def rewrite_class_rules(content: str) -> str:
    """Rewrite fill/stroke inside .stN-style class rules, keeping the rule shape."""
    return _CLASS_RULE_RE.sub(
        lambda m: m.group(1) + _rewrite_paint_decls(m.group(2)) + m.group(3),
        content,
    )


# ---------------------------------------------------------------------------
# Pass 3: inline fill declarations
# ---------------------------------------------------------------------------

_INLINE_FILL_RE = re.compile(rf"(?<![\w-])fill\s*:\s*{_COLOR_VALUE}", re.IGNORECASE)


def rewrite_inline_fills(content: str) -> str:
    """fill:#abc, fill: rgb(...), fill:rgba(...) -> fill:currentColor."""
    return _INLINE_FILL_RE.sub(f"fill:{SENTINEL}", content)


# ---------------------------------------------------------------------------
# Pass 4: url(#...) references
# ---------------------------------------------------------------------------

_URL_ATTR_RE = re.compile(r"""(?<![\w:-])(fill|stroke)\s*=\s*(["'])url\([^)]*\)\2""")
_URL_DECL_RE = re.compile(r"(?<![\w-])(fill|stroke)\s*:\s*url\([^)]*\)")


def rewrite_paint_references(content: str) -> str:
    """Replace gradient/pattern references with currentColor.

    A gradient cannot be expressed as one inherited color, so this is lossy.
    """
    content = _URL_ATTR_RE.sub(lambda m: f"{m.group(1)}={m.group(2)}{SENTINEL}{m.group(2)}", content)
    return _URL_DECL_RE.sub(lambda m: f"{m.group(1)}:{SENTINEL}", content)


# ---------------------------------------------------------------------------
# Pass 5: gradient stops
# ---------------------------------------------------------------------------

_STOP_DECL_RE = re.compile(rf"stop-color\s*:\s*{_COLOR_VALUE}", re.IGNORECASE)
_STOP_ATTR_RE = re.compile(r"""stop-color\s*=\s*(["'])(.*?)\1""")


def rewrite_stop_colors(content: str) -> str:
    """Neutralize stop colors left behind in now-unreferenced gradients."""
    content = _STOP_DECL_RE.sub(f"stop-color:{SENTINEL}", content)

    def repl(m: re.Match) -> str:
        if m.group(2).strip().lower() == SENTINEL.lower():
            return m.group(0)
        return f"stop-color={m.group(1)}{SENTINEL}{m.group(1)}"

    return _STOP_ATTR_RE.sub(repl, content)


# ---------------------------------------------------------------------------
# Whole-file normalization
# ---------------------------------------------------------------------------

def looks_like_svg(content: str) -> bool:
    """False for files that are clearly not markup (e.g. a PNG named icon.svg)."""
    return "<svg" in content or content.strip().startswith("<")


def normalize_svg(content: str) -> str:
    """Apply all rewrite passes to SVG markup and return the result."""
    content = rewrite_color_attribute(content, "fill")
    content = rewrite_color_attribute(content, "stroke")
    content = rewrite_class_rules(content)
    content = rewrite_inline_fills(content)
    content = rewrite_paint_references(content)
    content = rewrite_stop_colors(content)
    return content


def fix_svg(path: str, dry_run: bool = False) -> str:
    """Normalize one icon file in place.

    Returns MODIFIED, UNMODIFIED or NOT_SVG.  The file is written at most
    once, and only when the content changed.  surrogateescape keeps stray
    non-UTF-8 bytes intact across the read/write.
    """
    with open(path, encoding="utf-8", errors="surrogateescape", newline="") as f:
        content = f.read()

    if not looks_like_svg(content):
        return NOT_SVG

    fixed = normalize_svg(content)
    if fixed == content:
        return UNMODIFIED

    if not dry_run:
        with open(path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(fixed)
    return MODIFIED


# ---------------------------------------------------------------------------
# Catalog scan
# ---------------------------------------------------------------------------

class IconFixReport:
    """Per-server outcome of a catalog icon scan, each list in scan order."""
    def __init__(self):
        self.fixed: list[str] = []
        self.unmodified: list[str] = []
        self.not_svg: list[str] = []
        self.missing: list[str] = []
        self.errors: list[tuple[str, str]] = []


def fix_catalog_icons(servers_dir: str, dry_run: bool = False) -> IconFixReport:
    """Normalize servers/<id>/icon.svg for every server directory.

    Servers without an icon are skipped; an unreadable icon is reported
    and the scan moves on.
    """
    report = IconFixReport()
    for server_id in iter_server_dirs(servers_dir):
        icon_path = os.path.join(servers_dir, server_id, ICON_NAME)
        if not os.path.isfile(icon_path):
            report.missing.append(server_id)
            continue

        try:
            status = fix_svg(icon_path, dry_run=dry_run)
        except OSError as e:
            print(f"warning: could not process {icon_path}: {e}", file=sys.stderr)
            report.errors.append((server_id, str(e)))
            continue

        if status == MODIFIED:
            print(f"Fixed: {server_id}")
            report.fixed.append(server_id)
        elif status == NOT_SVG:
            report.not_svg.append(server_id)
        else:
            report.unmodified.append(server_id)
    return report
