from __future__ import annotations
import logging
import math
import re
from typing import Optional
from geometry import parse_number_list

log = logging.getLogger(__name__)

transform_pattern = re.compile(r'(translate|scale|rotate|skewX|skewY|matrix)\s*\(([^)]*)\)')

class TransformMatrix:
    """2x3 affine matrix laid out as SVG's ``matrix(a b c d e f)``."""

    def __init__(self, a: float = 1.0, b: float = 0.0, c: float = 0.0,
                 d: float = 1.0, e: float = 0.0, f: float = 0.0):
        self.a = a
        self.b = b
        self.c = c
        self.d = d
        self.e = e
        self.f = f

    @staticmethod
    def identity() -> 'TransformMatrix':
        return TransformMatrix(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)

    @staticmethod
    def translate(tx: float, ty: float) -> 'TransformMatrix':
        return TransformMatrix(1.0, 0.0, 0.0, 1.0, tx, ty)

    @staticmethod
    def scale(sx: float, sy: float = None) -> 'TransformMatrix':
        if sy is None:
            sy = sx
        return TransformMatrix(sx, 0.0, 0.0, sy, 0.0, 0.0)

    @staticmethod
    def rotate(angle_degrees: float, cx: float = 0.0, cy: float = 0.0) -> 'TransformMatrix':
        angle_rad = math.radians(angle_degrees)
        cos_a = math.cos(angle_rad)
        sin_a = math.sin(angle_rad)

        if cx != 0.0 or cy != 0.0:
            t1 = TransformMatrix.translate(-cx, -cy)
            r = TransformMatrix(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)
            t2 = TransformMatrix.translate(cx, cy)
            return t2.multiply(r).multiply(t1)
        else:
            return TransformMatrix(cos_a, sin_a, -sin_a, cos_a, 0.0, 0.0)

    def multiply(self, other: 'TransformMatrix') -> 'TransformMatrix':
        """Return ``self x other``: ``other`` is applied first."""
        return TransformMatrix(
            self.a * other.a + self.c * other.b,
            self.b * other.a + self.d * other.b,
            self.a * other.c + self.c * other.d,
            self.b * other.c + self.d * other.d,
            self.a * other.e + self.c * other.f + self.e,
            self.b * other.e + self.d * other.f + self.f
        )

    def is_identity(self) -> bool:
        return (abs(self.a - 1.0) < 1e-6 and abs(self.b) < 1e-6 and
                abs(self.c) < 1e-6 and abs(self.d - 1.0) < 1e-6 and
                abs(self.e) < 1e-6 and abs(self.f) < 1e-6)

    def transform_point(self, x: float, y: float) -> tuple[float, float]:
        new_x = self.a * x + self.c * y + self.e
        new_y = self.b * x + self.d * y + self.f
        return (new_x, new_y)

    def to_tuple(self) -> tuple[float, float, float, float, float, float]:
        return (self.a, self.b, self.c, self.d, self.e, self.f)

    def __repr__(self):
        return f"TransformMatrix({self.a:g}, {self.b:g}, {self.c:g}, {self.d:g}, {self.e:g}, {self.f:g})"

def parse_transform_list(transform_str: str) -> list[tuple[str, list[float]]]:
    """Split a transform attribute into ``(name, params)`` pairs in source order.

    Function names outside the SVG set are not matched and so drop out here.
    """
    if not transform_str:
        return []

    return [(func_name, parse_number_list(params))
            for func_name, params in transform_pattern.findall(transform_str)]

def make_function_matrix(func_name: str, params: list[float],
                         warnings: Optional[list] = None) -> TransformMatrix:
    if func_name == 'matrix':
        if len(params) >= 6:
            return TransformMatrix(*params[:6])
        return TransformMatrix.identity()

    elif func_name == 'translate':
        tx = params[0] if len(params) > 0 else 0.0
        ty = params[1] if len(params) > 1 else 0.0
        return TransformMatrix.translate(tx, ty)

    elif func_name == 'scale':
        sx = params[0] if len(params) > 0 else 1.0
        sy = params[1] if len(params) > 1 else sx
        return TransformMatrix.scale(sx, sy)

    elif func_name == 'rotate':
        angle = params[0] if len(params) > 0 else 0.0
        cx = params[1] if len(params) > 2 else 0.0
        cy = params[2] if len(params) > 2 else 0.0
        return TransformMatrix.rotate(angle, cx, cy)

    # skewX / skewY
    message = f"{func_name} transform is not supported, identity used"
    log.warning(message)
    if warnings is not None:
        warnings.append(message)
    return TransformMatrix.identity()

def resolve_transform(transform_str: str, warnings: Optional[list] = None) -> Optional[TransformMatrix]:
    """Compose a transform attribute into one matrix, ``None`` when absent.

    Functions are replayed from the rightmost one, each new function being
    premultiplied, so the leftmost function in the source ends up outermost.
    """
    if not transform_str:
        return None

    m = TransformMatrix.identity()
    for func_name, params in reversed(parse_transform_list(transform_str)):
        m = make_function_matrix(func_name, params, warnings).multiply(m)
    return m
