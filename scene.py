from __future__ import annotations
from typing import Iterator, Optional
from transform import TransformMatrix
from text_metrics import measure_text

STYLE_PROPS = (
    'fill', 'stroke', 'opacity', 'fill_opacity', 'stroke_opacity',
    'line_width', 'line_dash', 'line_dash_offset', 'line_cap', 'line_join', 'miter_limit',
    'font_family', 'font_size', 'font_style', 'font_weight', 'text_align', 'text_baseline',
    'text', 'text_fill', 'text_stroke', 'text_stroke_width',
    'image', 'x', 'y', 'width', 'height',
)

class Style:
    """Paint and text properties of a displayable; unset properties are ``None``."""

    __slots__ = STYLE_PROPS

    def __init__(self, **props):
        for name in STYLE_PROPS:
            setattr(self, name, None)
        for name, value in props.items():
            self.set(name, value)

    def set(self, name: str, value):
        if name not in STYLE_PROPS:
            raise AttributeError(f"Unknown style property: {name}")
        setattr(self, name, value)

    def get(self, name: str, default=None):
        value = getattr(self, name, None)
        return default if value is None else value

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in STYLE_PROPS if getattr(self, name) is not None}

    def __repr__(self):
        props = ', '.join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"Style({props})"

class LinearGradient:
    type = 'linear'

    def __init__(self, x1: float = 0.0, y1: float = 0.0, x2: float = 10.0, y2: float = 0.0):
        self.x1 = x1
        self.y1 = y1
        self.x2 = x2
        self.y2 = y2
        self.color_stops: list[tuple[float, str]] = []

    def add_color_stop(self, offset: float, color: str):
        self.color_stops.append((offset, color))

    def __repr__(self):
        return f"LinearGradient(({self.x1:g}, {self.y1:g}) -> ({self.x2:g}, {self.y2:g}), {len(self.color_stops)} stops)"

class Element:
    type = 'element'

    def __init__(self):
        self.parent: Optional[Group] = None
        self.transform: Optional[TransformMatrix] = None
        self.position = [0.0, 0.0]
        self.scale = [1.0, 1.0]
        self.clip_path: Optional[Rect] = None

    def get_local_transform(self) -> TransformMatrix:
        """Position, then scale, then the element's own transform matrix."""
        m = TransformMatrix.translate(self.position[0], self.position[1])
        m = m.multiply(TransformMatrix.scale(self.scale[0], self.scale[1]))
        if self.transform is not None:
            m = m.multiply(self.transform)
        return m

    def set_clip_path(self, clip_path: 'Rect'):
        self.clip_path = clip_path

    def describe(self) -> str:
        return self.type

    def print_tree(self, level=0):
        indent = '    ' * level
        extras = []
        if self.transform is not None:
            extras.append(repr(self.transform))
        if self.position != [0.0, 0.0] or self.scale != [1.0, 1.0]:
            extras.append(f"position={self.position} scale={self.scale}")
        if self.clip_path is not None:
            extras.append(f"clip={self.clip_path.describe()}")
        suffix = f" [{'; '.join(extras)}]" if extras else ""
        print(f"{indent}- {self.describe()}{suffix}")

class Group(Element):
    type = 'group'

    def __init__(self):
        super().__init__()
        self.children: list[Element] = []
        # groups carry style only so descendants can be inspected; they draw nothing
        self.style = Style()
        self.has_stroke = False

    def add(self, child: Element) -> Element:
        child.parent = self
        self.children.append(child)
        return child

    def traverse(self) -> Iterator[Element]:
        for child in self.children:
            yield child
            if isinstance(child, Group):
                yield from child.traverse()

    def print_tree(self, level=0):
        super().print_tree(level)
        for child in self.children:
            child.print_tree(level + 1)

class Displayable(Element):
    def __init__(self):
        super().__init__()
        self.style = Style()
        self.has_stroke = False

class Rect(Displayable):
    type = 'rect'

    def __init__(self, x: float = 0.0, y: float = 0.0, width: float = 0.0, height: float = 0.0):
        super().__init__()
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def describe(self) -> str:
        return f"rect ({self.x:g}, {self.y:g}, {self.width:g}x{self.height:g})"

class Circle(Displayable):
    type = 'circle'

    def __init__(self, cx: float = 0.0, cy: float = 0.0, r: float = 0.0):
        super().__init__()
        self.cx = cx
        self.cy = cy
        self.r = r

    def describe(self) -> str:
        return f"circle ({self.cx:g}, {self.cy:g}, r={self.r:g})"

class Ellipse(Displayable):
    type = 'ellipse'

    def __init__(self, cx: float = 0.0, cy: float = 0.0, rx: float = 0.0, ry: float = 0.0):
        super().__init__()
        self.cx = cx
        self.cy = cy
        self.rx = rx
        self.ry = ry

    def describe(self) -> str:
        return f"ellipse ({self.cx:g}, {self.cy:g}, rx={self.rx:g}, ry={self.ry:g})"

class Line(Displayable):
    type = 'line'

    def __init__(self, x1: float = 0.0, y1: float = 0.0, x2: float = 0.0, y2: float = 0.0):
        super().__init__()
        self.x1 = x1
        self.y1 = y1
        self.x2 = x2
        self.y2 = y2

    def describe(self) -> str:
        return f"line ({self.x1:g}, {self.y1:g}) -> ({self.x2:g}, {self.y2:g})"

class Polygon(Displayable):
    type = 'polygon'

    def __init__(self, points: list[tuple[float, float]] = None):
        super().__init__()
        self.points = points if points is not None else []

    def describe(self) -> str:
        return f"{self.type} ({len(self.points)} points)"

class Polyline(Polygon):
    type = 'polyline'

class Path(Displayable):
    type = 'path'

    def __init__(self, commands: list = None):
        super().__init__()
        self.commands = commands if commands is not None else []

    def describe(self) -> str:
        return f"path ({len(self.commands)} commands)"

class Image(Displayable):
    type = 'image'

    def describe(self) -> str:
        return f"image ({self.style.image})"

class Text(Displayable):
    type = 'text'

    def __init__(self, text: str = ''):
        super().__init__()
        self.style.text = text

    def get_bounding_rect(self) -> tuple[float, float, float, float]:
        """Local ``(x, y, width, height)`` of the run, ignoring position and scale."""
        width, height = measure_text(self.style.text or '', self.style.font_family, self.style.font_size)
        return (0.0, -height, width, height)

    def describe(self) -> str:
        return f"text \"{self.style.text}\" at ({self.position[0]:g}, {self.position[1]:g})"
