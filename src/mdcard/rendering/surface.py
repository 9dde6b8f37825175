#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/rendering/surface.py
"""Drawing surface abstraction and its Pillow implementation.

The layout engine only ever talks to a ``DrawingSurface``: a small 2D
canvas API with mutable paint state (``font``, ``fill_style``,
``stroke_style``, ``line_width``), text measurement, rectangle and path
primitives and a coordinate scale. ``PillowSurface`` implements it on top
of a Pillow RGBA image. Text is drawn on its alphabetic baseline.

"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Protocol, runtime_checkable

from PIL import Image, ImageColor, ImageDraw

from mdcard.constants import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE
from mdcard.exceptions import SurfaceUnavailableError
from mdcard.rendering.fonts import resolve_font

logger = logging.getLogger(__name__)

# Segments used to flatten one quadratic curve
CURVE_SEGMENTS = 12

_RGBA_PATTERN = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)$",
    re.IGNORECASE,
)

RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class TextMetrics:
    """Result of a text measurement, in logical pixels."""

    width: float


@runtime_checkable
class DrawingSurface(Protocol):
    """The 2D canvas primitive set consumed by the layout engine."""

    font: str
    fill_style: str
    stroke_style: str
    line_width: float

    def measure_text(self, text: str) -> TextMetrics: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def stroke_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None: ...

    def close_path(self) -> None: ...

    def fill(self) -> None: ...

    def stroke(self) -> None: ...

    def scale(self, x: float, y: float) -> None: ...


def parse_color(color: str) -> RGBA:
    """Convert a CSS colour string to an RGBA tuple.

    Supports everything ``PIL.ImageColor`` understands plus ``rgba()`` with
    a fractional alpha component, as used by canvas APIs.

    Parameters
    ----------
    color : str
        Colour such as ``"#1a1a1a"``, ``"white"`` or ``"rgba(0, 0, 0, 0.1)"``

    Returns
    -------
    tuple of int
        ``(r, g, b, a)`` with components in 0-255

    Raises
    ------
    ValueError
        If the colour cannot be parsed

    """
    match = _RGBA_PATTERN.match(color.strip())
    if match:
        red, green, blue, alpha = match.groups()
        alpha_value = 1.0 if alpha is None else float(alpha)
        if alpha_value > 1:
            alpha_value = alpha_value / 255
        return (
            min(int(red), 255),
            min(int(green), 255),
            min(int(blue), 255),
            round(max(0.0, min(alpha_value, 1.0)) * 255),
        )
    if color.strip().lower() == "transparent":
        return (0, 0, 0, 0)
    red, green, blue, alpha = ImageColor.getcolor(color, "RGBA")  # type: ignore[misc]
    return (red, green, blue, alpha)


class PillowSurface:
    """``DrawingSurface`` backed by a Pillow RGBA image.

    Parameters
    ----------
    width, height : int
        Image size in device pixels
    font_paths : mapping, optional
        Font file overrides keyed by family name

    Notes
    -----
    Coordinates passed to the drawing methods are logical; they are
    multiplied by the current scale (see ``scale``) before reaching the
    image. ``measure_text`` reports logical widths.

    Translucent fills are composited onto the image; opaque fills replace
    pixels directly.

    """

    def __init__(self, width: int, height: int, font_paths: Optional[Mapping[str, str]] = None):
        """Create a transparent surface of the given device size."""
        if width <= 0 or height <= 0:
            raise SurfaceUnavailableError(f"Invalid surface size {width}x{height}")
        self._image = Image.new("RGBA", (int(width), int(height)), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self._image)
        self._font_paths = dict(font_paths or {})
        self._scale_x = 1.0
        self._scale_y = 1.0
        self._subpaths: list[list[tuple[float, float]]] = []

        self.font = f"{DEFAULT_FONT_SIZE}px {DEFAULT_FONT_FAMILY}"
        self.fill_style = "#000000"
        self.stroke_style = "#000000"
        self.line_width = 1.0

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def pixel_size(self) -> tuple[int, int]:
        """Image size in device pixels."""
        return self._image.size

    @property
    def width(self) -> float:
        """Surface width in logical pixels."""
        return self._image.width / self._scale_x

    @property
    def height(self) -> float:
        """Surface height in logical pixels."""
        return self._image.height / self._scale_y

    @property
    def scale_factor(self) -> tuple[float, float]:
        """Current horizontal and vertical scale."""
        return (self._scale_x, self._scale_y)

    def scale(self, x: float, y: float) -> None:
        """Multiply the coordinate transform, like ``CanvasRenderingContext2D.scale``."""
        self._scale_x *= x
        self._scale_y *= y

    def resize(self, width: int, height: int) -> None:
        """Resize the backing image to a new device size, keeping content and transform."""
        if width <= 0 or height <= 0:
            raise SurfaceUnavailableError(f"Invalid surface size {width}x{height}")
        if (width, height) == self._image.size:
            return
        resized = Image.new("RGBA", (int(width), int(height)), (0, 0, 0, 0))
        resized.paste(self._image, (0, 0))
        self._image = resized
        self._draw = ImageDraw.Draw(self._image)
        logger.debug("Surface resized to %dx%d device pixels", width, height)

    def _point(self, x: float, y: float) -> tuple[float, float]:
        return (x * self._scale_x, y * self._scale_y)

    def _box(self, x: float, y: float, width: float, height: float) -> Optional[tuple[int, int, int, int]]:
        left, top = self._point(min(x, x + width), min(y, y + height))
        right, bottom = self._point(max(x, x + width), max(y, y + height))
        box = (round(left), round(top), round(right), round(bottom))
        if box[2] <= box[0] or box[3] <= box[1]:
            return None
        return box

    def _paint(self, color: str, draw_op: Callable[[ImageDraw.ImageDraw, RGBA], None]) -> None:
        rgba = parse_color(color)
        if rgba[3] == 0:
            return
        if rgba[3] == 255:
            draw_op(self._draw, rgba)
            return
        overlay = Image.new("RGBA", self._image.size, (0, 0, 0, 0))
        draw_op(ImageDraw.Draw(overlay), rgba)
        self._image.alpha_composite(overlay)

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def measure_text(self, text: str) -> TextMetrics:
        """Measure ``text`` in the current font, in logical pixels."""
        if not text:
            return TextMetrics(width=0.0)
        font = resolve_font(self.font, self._scale_x, self._font_paths)
        return TextMetrics(width=font.getlength(text) / self._scale_x)

    def fill_text(self, text: str, x: float, y: float) -> None:
        """Draw ``text`` with its alphabetic baseline at ``y``."""
        if not text:
            return
        font = resolve_font(self.font, self._scale_y, self._font_paths)
        position = self._point(x, y)
        self._paint(self.fill_style, lambda draw, rgba: draw.text(position, text, font=font, fill=rgba, anchor="ls"))

    # ------------------------------------------------------------------
    # Rectangles
    # ------------------------------------------------------------------

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Fill a rectangle with the current fill style."""
        box = self._box(x, y, width, height)
        if box is None:
            return
        inclusive = (box[0], box[1], box[2] - 1, box[3] - 1)
        self._paint(self.fill_style, lambda draw, rgba: draw.rectangle(inclusive, fill=rgba))

    def stroke_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Outline a rectangle with the current stroke style and line width."""
        box = self._box(x, y, width, height)
        if box is None:
            return
        inclusive = (box[0], box[1], box[2] - 1, box[3] - 1)
        stroke_width = self._device_line_width()
        self._paint(self.stroke_style, lambda draw, rgba: draw.rectangle(inclusive, outline=rgba, width=stroke_width))

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        """Make a rectangle fully transparent."""
        box = self._box(x, y, width, height)
        if box is not None:
            self._image.paste((0, 0, 0, 0), box)

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def begin_path(self) -> None:
        """Discard the current path."""
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        """Start a new subpath at ``(x, y)``."""
        self._subpaths.append([(x, y)])

    def line_to(self, x: float, y: float) -> None:
        """Add a straight segment to the current subpath."""
        if not self._subpaths:
            self._subpaths.append([(x, y)])
            return
        self._subpaths[-1].append((x, y))

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None:
        """Add a quadratic Bezier segment, flattened into straight segments."""
        if not self._subpaths:
            self._subpaths.append([(cpx, cpy)])
        start_x, start_y = self._subpaths[-1][-1]
        for step in range(1, CURVE_SEGMENTS + 1):
            t = step / CURVE_SEGMENTS
            inverse = 1 - t
            self._subpaths[-1].append(
                (
                    inverse * inverse * start_x + 2 * inverse * t * cpx + t * t * x,
                    inverse * inverse * start_y + 2 * inverse * t * cpy + t * t * y,
                )
            )

    def close_path(self) -> None:
        """Close the current subpath back to its first point."""
        if self._subpaths and len(self._subpaths[-1]) > 1:
            first = self._subpaths[-1][0]
            self._subpaths[-1].append(first)
            self._subpaths.append([first])

    def fill(self) -> None:
        """Fill every subpath of the current path with the fill style."""
        polygons = [[self._point(px, py) for px, py in path] for path in self._subpaths if len(path) >= 3]
        if not polygons:
            return

        def draw_polygons(draw: ImageDraw.ImageDraw, rgba: RGBA) -> None:
            for polygon in polygons:
                draw.polygon(polygon, fill=rgba)

        self._paint(self.fill_style, draw_polygons)

    def stroke(self) -> None:
        """Stroke every subpath of the current path with the stroke style."""
        lines = [[self._point(px, py) for px, py in path] for path in self._subpaths if len(path) >= 2]
        if not lines:
            return
        stroke_width = self._device_line_width()

        def draw_lines(draw: ImageDraw.ImageDraw, rgba: RGBA) -> None:
            for line in lines:
                draw.line(line, fill=rgba, width=stroke_width)

        self._paint(self.stroke_style, draw_lines)

    def _device_line_width(self) -> int:
        return max(1, math.floor(self.line_width * max(self._scale_x, self._scale_y) + 0.5))

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def to_image(self) -> Image.Image:
        """Return a copy of the painted image."""
        return self._image.copy()


class SurfaceProvider(Protocol):
    """Host collaborator that hands out drawing surfaces."""

    def acquire(self, width: float, height: float, pixel_ratio: float) -> DrawingSurface:
        """Return a surface sized ``width`` x ``height`` logical pixels at ``pixel_ratio``."""
        ...

    def resize(self, surface: DrawingSurface, width: float, height: float, pixel_ratio: float) -> None:
        """Grow or shrink an acquired surface."""
        ...

    def create_offscreen(self, pixel_ratio: float) -> DrawingSurface:
        """Return a scratch surface for measurement only."""
        ...


class PillowSurfaceProvider:
    """``SurfaceProvider`` that creates ``PillowSurface`` instances.

    Acquired surfaces come back unscaled; the render session applies the
    pixel ratio once with ``scale``.

    Parameters
    ----------
    font_paths : mapping, optional
        Font file overrides passed to every surface

    """

    def __init__(self, font_paths: Optional[Mapping[str, str]] = None):
        """Initialize the provider."""
        self.font_paths = dict(font_paths or {})

    @staticmethod
    def _device_size(width: float, height: float, pixel_ratio: float) -> tuple[int, int]:
        return (math.ceil(width * pixel_ratio), math.ceil(height * pixel_ratio))

    def acquire(self, width: float, height: float, pixel_ratio: float) -> PillowSurface:
        """Create a transparent surface of the requested size."""
        device_width, device_height = self._device_size(width, height, pixel_ratio)
        try:
            return PillowSurface(device_width, device_height, font_paths=self.font_paths)
        except (ValueError, MemoryError) as e:
            raise SurfaceUnavailableError(
                f"Could not allocate a {device_width}x{device_height} surface", original_error=e
            ) from e

    def resize(self, surface: DrawingSurface, width: float, height: float, pixel_ratio: float) -> None:
        """Resize a ``PillowSurface`` in place."""
        if not isinstance(surface, PillowSurface):
            raise SurfaceUnavailableError(f"Cannot resize surface of type {type(surface).__name__}")
        surface.resize(*self._device_size(width, height, pixel_ratio))

    def create_offscreen(self, pixel_ratio: float) -> PillowSurface:
        """Create a one-pixel surface scaled like an acquired one."""
        surface = PillowSurface(1, 1, font_paths=self.font_paths)
        surface.scale(pixel_ratio, pixel_ratio)
        return surface
