from __future__ import annotations
import re
from typing import Optional
from markup import Node
from geometry import parse_float, parse_number_list

# presentation attribute -> style property
ATTRIBUTES_MAP = {
    'fill': 'fill',
    'stroke': 'stroke',
    'stroke-width': 'line_width',
    'opacity': 'opacity',
    'fill-opacity': 'fill_opacity',
    'stroke-opacity': 'stroke_opacity',
    'stroke-dasharray': 'line_dash',
    'stroke-dashoffset': 'line_dash_offset',
    'stroke-linecap': 'line_cap',
    'stroke-linejoin': 'line_join',
    'stroke-miterlimit': 'miter_limit',
    'font-family': 'font_family',
    'font-size': 'font_size',
    'font-style': 'font_style',
    'font-weight': 'font_weight',
    'text-anchor': 'text_align',
    'text-align': 'text_align',
    'alignment-baseline': 'text_baseline',
}

NUMERIC_PROPS = ('line_width', 'opacity', 'fill_opacity', 'stroke_opacity',
                 'miter_limit', 'font_size', 'line_dash_offset')

STRING_PROPS = ('line_cap', 'line_join', 'font_weight', 'font_family', 'font_style',
                'text_align', 'text_baseline')

TEXT_ALIGN_MAP = {
    'start': 'left',
    'middle': 'center',
    'end': 'right',
}

# Value may contain spaces
style_pattern = re.compile(r'([^\s:;]+)\s*:\s*([^:;]+)')
url_pattern = re.compile(r'url\(\s*#(.*?)\)')

def parse_declarations(text: Optional[str]) -> dict:
    """Split a CSS declaration block into a lowercase-keyed dict."""
    declarations = {}
    for key, value in style_pattern.findall(text or ''):
        declarations[key.lower()] = value.strip()
    return declarations

def parse_style_attribute(node: Node) -> dict:
    result = {}
    declarations = parse_declarations(node.get('style'))

    # text-align comes after text-anchor in the map, so it wins
    for svg_attr_name, prop in ATTRIBUTES_MAP.items():
        if svg_attr_name in declarations:
            result[prop] = declarations[svg_attr_name]

    return result

def parse_presentation_attributes(node: Node) -> dict:
    result = {}
    for svg_attr_name, prop in ATTRIBUTES_MAP.items():
        value = node.get(svg_attr_name)
        if value is not None:
            result[prop] = value.strip()
    return result

def get_paint(value: str, defs: Optional[dict]):
    """Resolve ``url(#id)`` against ``defs``; other values pass through unchanged.

    An id that was never defined gives ``None``.
    """
    url_match = url_pattern.search(value) if value and defs is not None else None
    if url_match:
        return defs.get(url_match.group(1).strip())
    return value

def merge_style(node: Node, inherited: Optional[dict] = None, own_only: bool = False) -> dict:
    """Layer inherited, presentation and inline values into one record.

    Later layers win: inline declarations beat presentation attributes,
    which beat whatever was inherited. ``own_only`` skips the inherited layer.
    """
    merged = {} if own_only or inherited is None else dict(inherited)
    merged.update(parse_presentation_attributes(node))
    merged.update(parse_style_attribute(node))
    return merged

def apply_style(el, record: dict, defs: Optional[dict] = None):
    """Normalize a merged record onto ``el.style``."""
    is_text_el = el.type == 'text'
    el_fill_prop = 'text_fill' if is_text_el else 'fill'
    el_stroke_prop = 'text_stroke' if is_text_el else 'stroke'
    style = el.style

    if record.get('fill') is not None:
        style.set(el_fill_prop, get_paint(record['fill'], defs))
    if record.get('stroke') is not None:
        style.set(el_stroke_prop, get_paint(record['stroke'], defs))

    for prop in NUMERIC_PROPS:
        if record.get(prop) is None:
            continue
        number = parse_float(record[prop])
        if number is None:
            continue
        el_prop = 'text_stroke_width' if prop == 'line_width' and is_text_el else prop
        style.set(el_prop, number)

    text_baseline = record.get('text_baseline')
    if not text_baseline or text_baseline == 'auto':
        text_baseline = 'alphabetic'
    if text_baseline == 'alphabetic':
        text_baseline = 'bottom'

    text_align = record.get('text_align')
    text_align = TEXT_ALIGN_MAP.get(text_align, text_align)

    normalized = dict(record, text_baseline=text_baseline, text_align=text_align)
    for prop in STRING_PROPS:
        if normalized.get(prop) is not None:
            style.set(prop, normalized[prop])

    line_dash = record.get('line_dash')
    if line_dash and line_dash.strip() != 'none':
        style.line_dash = parse_number_list(line_dash)

    stroke = style.get(el_stroke_prop)
    if stroke and stroke != 'none':
        # never reset, even when a later pass resolves to "none"
        el.has_stroke = True

def resolve_style(node: Node, el, inherited: Optional[dict] = None,
                  defs: Optional[dict] = None, own_only: bool = False) -> dict:
    """Resolve ``node``'s style onto ``el`` and return the record its children inherit."""
    record = merge_style(node, inherited, own_only)
    apply_style(el, record, defs)
    return record
