"""Tests for icon color normalization."""

import os

import pytest

from conftest import write_server
from mcp_catalog.icons import (
    MODIFIED,
    NOT_SVG,
    UNMODIFIED,
    fix_catalog_icons,
    fix_svg,
    looks_like_svg,
    normalize_svg,
    rewrite_class_rules,
    rewrite_color_attribute,
    rewrite_inline_fills,
    rewrite_paint_references,
    rewrite_stop_colors,
)


# ---------------------------------------------------------------------------
# Attribute pass
# ---------------------------------------------------------------------------

def test_fill_attribute_rewritten():
    assert rewrite_color_attribute('<path fill="#ABCDEF"/>', "fill") == '<path fill="currentColor"/>'


def test_fill_pass_leaves_stroke_alone():
    src = '<path fill="#ABCDEF" stroke="rgb(1,2,3)"/>'
    assert rewrite_color_attribute(src, "fill") == '<path fill="currentColor" stroke="rgb(1,2,3)"/>'


def test_stroke_attribute_rewritten():
    assert rewrite_color_attribute('<path stroke="#ABCDEF"/>', "stroke") == '<path stroke="currentColor"/>'


@pytest.mark.parametrize("src", [
    '<path fill="none" stroke="none"/>',
    '<path fill="None"/>',
    '<path fill="currentColor" stroke="currentColor"/>',
])
def test_none_and_sentinel_preserved(src):
    assert normalize_svg(src) == src


def test_single_quoted_attribute():
    assert normalize_svg("<path fill='red'/>") == "<path fill='currentColor'/>"


def test_prefixed_attributes_not_touched():
    src = '<path data-fill="#fff" fill-rule="evenodd" stroke-width="2"/>'
    assert normalize_svg(src) == src


# ---------------------------------------------------------------------------
# CSS class pass
# ---------------------------------------------------------------------------

def test_class_rule_fill():
    assert rewrite_class_rules(".st0{fill:#7856FF;}") == ".st0{fill:currentColor;}"


def test_class_rule_keeps_structure_and_other_declarations():
    src = "<style>.st1 { fill: #fff; opacity: 0.5 }\n.cls12{stroke:#000;stroke-width:2}</style>"
    assert rewrite_class_rules(src) == (
        "<style>.st1 { fill:currentColor; opacity: 0.5 }\n"
        ".cls12{stroke:currentColor;stroke-width:2}</style>"
    )


def test_class_rule_without_trailing_semicolon():
    assert rewrite_class_rules(".st1{fill:#fff}") == ".st1{fill:currentColor}"


def test_class_rule_none_preserved():
    src = ".st2{fill:none;stroke:none;}"
    assert rewrite_class_rules(src) == src


def test_class_rule_selector_list():
    assert rewrite_class_rules(".st0,.st1{fill:red}") == ".st0,.st1{fill:currentColor}"


def test_class_rule_keeps_important():
    src = ".st0{fill:#fff !important;stroke:none !important}"
    out = rewrite_class_rules(src)
    assert out == ".st0{fill:currentColor !important;stroke:none !important}"
    assert rewrite_class_rules(out) == out


def test_non_style_class_untouched():
    src = ".background{fill:#fff}"
    assert rewrite_class_rules(src) == src


# ---------------------------------------------------------------------------
# Inline, reference and stop passes
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("src", [
    'style="fill:#abc"',
    'style="fill: #AABBCCDD"',
    'style="fill:rgb(1, 2, 3)"',
    'style="fill:rgba(1,2,3,0.5)"',
])
def test_inline_fill_values(src):
    assert rewrite_inline_fills(src) == 'style="fill:currentColor"'


def test_inline_fill_named_color_untouched():
    assert rewrite_inline_fills('style="fill:red"') == 'style="fill:red"'


def test_inline_fill_ignores_long_hex_runs():
    src = "fill:#0123456789"
    assert rewrite_inline_fills(src) == src


def test_paint_references():
    src = '<path fill="url(#grad1)" stroke="url(#p)" style="fill:url(#g2)"/>'
    assert rewrite_paint_references(src) == (
        '<path fill="currentColor" stroke="currentColor" style="fill:currentColor"/>'
    )


def test_stop_colors():
    src = '<stop offset="0" stop-color="#FF0000"/><stop style="stop-color:#00ff00"/>'
    assert rewrite_stop_colors(src) == (
        '<stop offset="0" stop-color="currentColor"/><stop style="stop-color:currentColor"/>'
    )


def test_gradient_icon_end_to_end():
    src = (
        '<svg xmlns="http://www.w3.org/2000/svg">'
        '<defs><linearGradient id="g"><stop offset="0" stop-color="#f00"/>'
        '<stop offset="1" style="stop-color:rgb(0,0,255)"/></linearGradient></defs>'
        '<rect fill="url(#g)" stroke="none"/></svg>'
    )
    out = normalize_svg(src)
    assert 'fill="currentColor"' in out
    assert 'stroke="none"' in out
    assert "#f00" not in out and "rgb(" not in out
    assert 'id="g"' in out


def test_normalize_is_idempotent():
    src = (
        '<svg><style>.st0{fill:#7856FF;}.st1{stroke:#111}</style>'
        '<path class="st0" fill="#fff" style="fill:rgba(0,0,0,.2)"/>'
        '<stop stop-color="#000"/></svg>'
    )
    once = normalize_svg(src)
    assert once != src
    assert normalize_svg(once) == once


# ---------------------------------------------------------------------------
# File handling
# ---------------------------------------------------------------------------

def test_looks_like_svg():
    assert looks_like_svg('<?xml version="1.0"?><svg/>')
    assert looks_like_svg("  <svg></svg>")
    assert not looks_like_svg("\x89PNG\r\n\x1a\nIHDR")


def test_fix_svg_modifies_then_reports_unmodified(tmp_path):
    path = tmp_path / "icon.svg"
    path.write_text('<svg><path fill="#123456"/></svg>')

    assert fix_svg(str(path)) == MODIFIED
    assert path.read_text() == '<svg><path fill="currentColor"/></svg>'
    assert fix_svg(str(path)) == UNMODIFIED


def test_fix_svg_skips_binary_content(tmp_path):
    data = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe fill="#fff"'
    path = tmp_path / "icon.svg"
    path.write_bytes(data)

    assert fix_svg(str(path)) == NOT_SVG
    assert path.read_bytes() == data


def test_fix_svg_preserves_line_endings_and_stray_bytes(tmp_path):
    path = tmp_path / "icon.svg"
    path.write_bytes(b'<svg>\r\n<path fill="red"/>\xff\r\n</svg>')

    assert fix_svg(str(path)) == MODIFIED
    assert path.read_bytes() == b'<svg>\r\n<path fill="currentColor"/>\xff\r\n</svg>'


def test_fix_svg_dry_run_does_not_write(tmp_path):
    path = tmp_path / "icon.svg"
    path.write_text('<svg fill="#000"/>')

    assert fix_svg(str(path), dry_run=True) == MODIFIED
    assert path.read_text() == '<svg fill="#000"/>'


def test_fix_svg_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        fix_svg(str(tmp_path / "nope.svg"))


# ---------------------------------------------------------------------------
# Catalog scan
# ---------------------------------------------------------------------------

def test_fix_catalog_icons(servers_dir, capsys):
    write_server(servers_dir, "alpha", icon='<svg><path fill="#000"/></svg>')
    write_server(servers_dir, "beta", icon='<svg><path fill="currentColor"/></svg>')
    write_server(servers_dir, "gamma", icon=b"\x89PNG\r\n")
    write_server(servers_dir, "delta")
    with open(os.path.join(servers_dir, "index.json"), "w") as f:
        f.write('["alpha"]')

    report = fix_catalog_icons(servers_dir)

    assert report.fixed == ["alpha"]
    assert report.unmodified == ["beta"]
    assert report.not_svg == ["gamma"]
    assert report.missing == ["delta"]
    assert report.errors == []
    assert "Fixed: alpha" in capsys.readouterr().out

    assert fix_catalog_icons(servers_dir).fixed == []


def test_fix_catalog_icons_continues_past_unreadable_icon(servers_dir, monkeypatch):
    write_server(servers_dir, "alpha", icon='<svg fill="#000"/>')
    write_server(servers_dir, "beta", icon='<svg fill="#000"/>')

    import mcp_catalog.icons as icons
    real_fix_svg = icons.fix_svg

    def flaky_fix_svg(path, dry_run=False):
        if os.sep + "alpha" + os.sep in path:
            raise PermissionError(13, "Permission denied")
        return real_fix_svg(path, dry_run=dry_run)

    monkeypatch.setattr(icons, "fix_svg", flaky_fix_svg)
    report = fix_catalog_icons(servers_dir)

    assert [sid for sid, _ in report.errors] == ["alpha"]
    assert report.fixed == ["beta"]
