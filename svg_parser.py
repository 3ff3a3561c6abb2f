from __future__ import annotations
import logging
import math
import re
from typing import Optional, Union
from markup import Node, DOCUMENT_TAG, parse_markup
from geometry import (delimiter_pattern, is_percentage, normalize_unit, parse_float,
                      parse_number_with_unit, parse_points)
from attributes import apply_style, parse_declarations, resolve_style
from transform import resolve_transform
from path_data import parse_path_data
from scene import (Circle, Ellipse, Element, Group, Image, Line, LinearGradient, Path,
                   Polygon, Polyline, Rect, Text)

log = logging.getLogger(__name__)

MIN_FONT_SIZE = 9.0

whitespace_pattern = re.compile(r'\s+')

class InvalidSVGError(ValueError):
    pass

class TextCursor:
    """Pen position shared by the runs of one ``<text>`` element."""

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def move_to(self, x: Optional[float] = None, y: Optional[float] = None):
        if x is not None:
            self.x = x
        if y is not None:
            self.y = y

    def move_by(self, dx: float = 0.0, dy: float = 0.0):
        self.x += dx
        self.y += dy

class SVGParseResult:
    def __init__(self, root: Group, width: Optional[float], height: Optional[float],
                 view_box_rect: Optional[tuple] = None, view_box_transform: Optional[dict] = None,
                 warnings: list[str] = None):
        self.root = root
        self.width = width
        self.height = height
        self.view_box_rect = view_box_rect
        self.view_box_transform = view_box_transform
        self.warnings = warnings if warnings is not None else []

    def print_report(self, show_warnings: bool = True):
        print(f"Viewport: {self.width}x{self.height}")
        if self.view_box_rect:
            print(f"ViewBox: {self.view_box_rect}")
        if self.view_box_transform:
            print(f"ViewBox transform: scale={self.view_box_transform['scale']} "
                  f"position={self.view_box_transform['position']}")
        if show_warnings and self.warnings:
            print("SVG parse: [WARNING] Warnings:")
            for warning in self.warnings:
                print(f"  WARNING: {warning}")

def find_svg_root(document: Node) -> Optional[Node]:
    """Return the first element named ``svg`` among the top-level siblings.

    Doctype, processing instructions and other elements before it are skipped.
    """
    if document.tag == DOCUMENT_TAG:
        candidates = document.children
    else:
        candidates = document.next_siblings()

    for node in candidates:
        if node.is_element and node.tag.lower() == 'svg':
            return node
    return None

def make_view_box_transform(view_box_rect: tuple, width: float, height: float) -> dict:
    """Uniform "meet" scale centering the viewBox in the viewport (xMidYMid)."""
    vb_x, vb_y, vb_width, vb_height = view_box_rect
    scale = min(width / vb_width, height / vb_height)

    return {
        'scale': (scale, scale),
        'position': (
            -(vb_x + vb_width / 2) * scale + width / 2,
            -(vb_y + vb_height / 2) * scale + height / 2,
        ),
    }

def parse_view_box(value: str) -> Optional[tuple]:
    if not value:
        return None

    parts = delimiter_pattern.split(value.strip())
    # values like "none" are not a viewBox
    if len(parts) < 4:
        return None

    vb_width = parse_float(parts[2])
    vb_height = parse_float(parts[3])
    if vb_width is None or vb_height is None:
        return None

    return (parse_float(parts[0], 0.0), parse_float(parts[1], 0.0), vb_width, vb_height)

class SVGParser:
    """Converts one SVG document into a scene tree.

    Parsing state lives on the instance, so each concurrent parse needs its own parser.
    """

    def __init__(self):
        self._defs = {}
        self._is_define = False
        self._is_text = False
        self.warnings: list[str] = []

    def _warn(self, message: str):
        log.warning(message)
        self.warnings.append(message)

    def parse(self, source: Union[str, bytes, Node], width: Optional[float] = None,
              height: Optional[float] = None, ignore_view_box: bool = False,
              ignore_root_clip: bool = False) -> SVGParseResult:
        self._defs = {}
        self._is_define = False
        self._is_text = False
        self.warnings = []

        if isinstance(source, bytes):
            source = source.decode('utf-8')
        document = parse_markup(source) if isinstance(source, str) else source

        svg = find_svg_root(document)
        if svg is None:
            raise InvalidSVGError("No root <svg> element found")

        root = Group()
        view_box = svg.get('viewBox', '')

        viewport_width = self._resolve_viewport_length(svg.get('width'), width, 'width')
        viewport_height = self._resolve_viewport_length(svg.get('height'), height, 'height')

        # inline style on the svg element itself; nothing above it to inherit from
        root_style = resolve_style(svg, root, defs=self._defs, own_only=True)
        root.transform = resolve_transform(svg.get('transform'), self.warnings)

        for child in svg.children:
            if child.is_element:
                self._parse_node(child, root, root_style, None)

        view_box_rect = parse_view_box(view_box)
        if view_box and view_box_rect is None:
            self._warn(f"Ignoring malformed viewBox: {view_box!r}")

        view_box_transform = None
        if (view_box_rect and viewport_width is not None and viewport_height is not None
                and view_box_rect[2] > 0 and view_box_rect[3] > 0):
            view_box_transform = make_view_box_transform(view_box_rect, viewport_width, viewport_height)

            if not ignore_view_box:
                el_root = root
                root = Group()
                root.add(el_root)
                el_root.scale = list(view_box_transform['scale'])
                el_root.position = list(view_box_transform['position'])

        # content overflowing the viewport is clipped whether or not a viewBox is used
        if not ignore_root_clip and viewport_width is not None and viewport_height is not None:
            root.set_clip_path(Rect(0.0, 0.0, viewport_width, viewport_height))

        return SVGParseResult(root, viewport_width, viewport_height,
                              view_box_rect, view_box_transform, self.warnings)

    def _resolve_viewport_length(self, value: Optional[str], fallback: Optional[float],
                                 name: str) -> Optional[float]:
        # an absent width/height means 100% of the configured default
        if value is None or not value.strip():
            return float(fallback) if fallback is not None else None

        parsed = parse_number_with_unit(value)
        if parsed is None:
            return float(fallback) if fallback is not None else None

        number, unit = parsed
        if unit == '%':
            if fallback is None:
                self._warn(f"Percentage {name} {value!r} has no default to resolve against")
                return None
            return float(fallback) * number / 100.0
        return normalize_unit(value)

    def _parse_node(self, node: Node, parent_group: Optional[Group], inherited: dict,
                    cursor: Optional[TextCursor]):
        node_name = node.tag.lower()

        if node_name == 'defs':
            self._is_define = True
        elif node_name == 'text':
            self._is_text = True
            cursor = TextCursor()
        elif node_name == 'style':
            self._warn("<style> blocks are not supported, CSS rules ignored")

        el = None
        child_style = inherited
        if self._is_define:
            builder = define_builders.get(node_name)
            if builder:
                definition = builder(self, node)
                def_id = node.get('id')
                if def_id:
                    if def_id in self._defs:
                        self._warn(f"Duplicate definition id {def_id!r}, keeping the first")
                    else:
                        self._defs[def_id] = definition
            elif node_name in ('radialgradient', 'pattern'):
                self._warn(f"<{node.tag}> definitions are not supported")
        else:
            builder = node_builders.get(node_name)
            if builder and parent_group is not None:
                el = builder(self, node, inherited, cursor)
                child_style = resolve_style(node, el, inherited, self._defs)
                el.transform = resolve_transform(node.get('transform'), self.warnings)
                parent_group.add(el)

        # children of a non-group element attach to the nearest group
        child_group = el if isinstance(el, Group) else parent_group
        if self._is_define:
            child_group = None

        for child in node.children:
            if child.is_element:
                self._parse_node(child, child_group, child_style, cursor)
            elif child.is_text and self._is_text and child_group is not None and cursor is not None:
                self._parse_text(child, child_group, child_style, cursor)

        if node_name == 'defs':
            self._is_define = False
        elif node_name == 'text':
            self._is_text = False

    def _parse_text(self, node: Node, parent_group: Group, inherited: dict,
                    cursor: TextCursor) -> Optional[Text]:
        content = whitespace_pattern.sub(' ', node.text or '')
        if not content.strip():
            return None

        text = Text(content)
        text.position = [cursor.x, cursor.y]
        apply_style(text, dict(inherited), self._defs)

        font_size = text.style.font_size
        if font_size is not None and not math.isfinite(font_size):
            self._warn(f"Ignoring non-finite font-size for text {content.strip()!r}")
            text.style.font_size = font_size = None
        if font_size and font_size < MIN_FONT_SIZE:
            # keep the metric at the minimum and shrink the node instead
            text.style.font_size = MIN_FONT_SIZE
            text.scale[0] *= font_size / MIN_FONT_SIZE
            text.scale[1] *= font_size / MIN_FONT_SIZE

        rect = text.get_bounding_rect()
        cursor.move_by(rect[2], 0.0)

        parent_group.add(text)
        return text

    def _length(self, node: Node, attr_name: str, default: float = 0.0) -> float:
        value = node.get(attr_name)
        if value is None:
            return default
        if is_percentage(value):
            self._warn(f"Percentage unit on <{node.tag}> {attr_name}={value!r} is not supported")
        return parse_float(value, default)

    def _build_group(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        return Group()

    def _build_rect(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        return Rect(self._length(node, 'x'), self._length(node, 'y'),
                    self._length(node, 'width'), self._length(node, 'height'))

    def _build_circle(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        return Circle(self._length(node, 'cx'), self._length(node, 'cy'), self._length(node, 'r'))

    def _build_line(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        return Line(self._length(node, 'x1'), self._length(node, 'y1'),
                    self._length(node, 'x2'), self._length(node, 'y2'))

    def _build_ellipse(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        return Ellipse(self._length(node, 'cx'), self._length(node, 'cy'),
                       self._length(node, 'rx'), self._length(node, 'ry'))

    def _build_polygon(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        return Polygon(parse_points(node.get('points', '')))

    def _build_polyline(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        return Polyline(parse_points(node.get('points', '')))

    def _build_image(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        img = Image()
        img.style.image = node.get('xlink:href', node.get('href'))
        img.style.x = self._length(node, 'x')
        img.style.y = self._length(node, 'y')
        img.style.width = self._length(node, 'width')
        img.style.height = self._length(node, 'height')
        return img

    def _build_text(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        cursor.move_to(self._length(node, 'x') + self._length(node, 'dx'),
                       self._length(node, 'y') + self._length(node, 'dy'))
        return Group()

    def _build_tspan(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        if cursor is None:
            # a stray tspan outside <text> still groups its children
            return Group()
        x = node.get('x')
        y = node.get('y')
        cursor.move_to(parse_float(x) if x is not None else None,
                       parse_float(y) if y is not None else None)
        cursor.move_by(self._length(node, 'dx'), self._length(node, 'dy'))
        return Group()

    def _build_path(self, node: Node, inherited: dict, cursor: Optional[TextCursor]) -> Element:
        return Path(parse_path_data(node.get('d', '')))

    def _build_linear_gradient(self, node: Node) -> LinearGradient:
        gradient = LinearGradient(
            parse_float(node.get('x1', '0'), 0.0),
            parse_float(node.get('y1', '0'), 0.0),
            parse_float(node.get('x2', '10'), 10.0),
            parse_float(node.get('y2', '0'), 0.0),
        )

        for stop in node.children:
            if not stop.is_element:
                continue
            offset_str = stop.get('offset', '')
            if '%' in offset_str:
                offset = parse_float(offset_str, 0.0) / 100.0
            else:
                offset = parse_float(offset_str, 0.0)

            stop_color = stop.get('stop-color')
            if stop_color is None:
                stop_color = parse_declarations(stop.get('style')).get('stop-color', '#000000')
            gradient.add_color_stop(offset, stop_color)

        return gradient

node_builders = {
    'g': SVGParser._build_group,
    'rect': SVGParser._build_rect,
    'circle': SVGParser._build_circle,
    'line': SVGParser._build_line,
    'ellipse': SVGParser._build_ellipse,
    'polygon': SVGParser._build_polygon,
    'polyline': SVGParser._build_polyline,
    'image': SVGParser._build_image,
    'text': SVGParser._build_text,
    'tspan': SVGParser._build_tspan,
    'path': SVGParser._build_path,
}

define_builders = {
    'lineargradient': SVGParser._build_linear_gradient,
}

def parse_svg(source: Union[str, bytes, Node], width: Optional[float] = None,
              height: Optional[float] = None, ignore_view_box: bool = False,
              ignore_root_clip: bool = False) -> SVGParseResult:
    return SVGParser().parse(source, width=width, height=height,
                             ignore_view_box=ignore_view_box,
                             ignore_root_clip=ignore_root_clip)
