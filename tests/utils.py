"""Test utilities for the mdcard test suite.

This module provides a deterministic drawing surface that records every
primitive call, plus temporary directory helpers.
"""

import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mdcard.rendering.fonts import parse_font
from mdcard.rendering.surface import TextMetrics


@dataclass
class SurfaceCall:
    """One recorded drawing call with the surface state at call time."""

    name: str
    args: tuple[Any, ...]
    font: str
    fill_style: str
    stroke_style: str
    line_width: float


@dataclass
class RecordingSurface:
    """Drawing surface with a fixed advance per code point.

    Every code point is ``advance_ratio * font size`` wide, so ``"abc"`` in a
    16px font measures 24 logical pixels with the default ratio.
    """

    advance_ratio: float = 0.5
    font: str = "16px sans-serif"
    fill_style: str = "#000000"
    stroke_style: str = "#000000"
    line_width: float = 1.0
    calls: list[SurfaceCall] = field(default_factory=list)
    measure_calls: int = 0
    scale_factor: tuple[float, float] = (1.0, 1.0)

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append(SurfaceCall(name, args, self.font, self.fill_style, self.stroke_style, self.line_width))

    def advance(self, font: str) -> float:
        return parse_font(font).size * self.advance_ratio

    def measure_text(self, text: str) -> TextMetrics:
        self.measure_calls += 1
        return TextMetrics(width=len(text) * self.advance(self.font))

    def fill_text(self, text: str, x: float, y: float) -> None:
        self._record("fill_text", text, x, y)

    def fill_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("fill_rect", x, y, width, height)

    def stroke_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("stroke_rect", x, y, width, height)

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        self._record("clear_rect", x, y, width, height)

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", x, y)

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", x, y)

    def quadratic_curve_to(self, cpx: float, cpy: float, x: float, y: float) -> None:
        self._record("quadratic_curve_to", cpx, cpy, x, y)

    def close_path(self) -> None:
        self._record("close_path")

    def fill(self) -> None:
        self._record("fill")

    def stroke(self) -> None:
        self._record("stroke")

    def scale(self, x: float, y: float) -> None:
        self.scale_factor = (self.scale_factor[0] * x, self.scale_factor[1] * y)
        self._record("scale", x, y)

    def calls_named(self, name: str) -> list[SurfaceCall]:
        """Return the recorded calls of one primitive."""
        return [call for call in self.calls if call.name == name]

    def texts(self) -> list[str]:
        """Return the painted strings in paint order."""
        return [call.args[0] for call in self.calls_named("fill_text")]


class RecordingSurfaceProvider:
    """Surface provider handing out recording surfaces."""

    def __init__(self, advance_ratio: float = 0.5):
        self.advance_ratio = advance_ratio
        self.acquired: list[RecordingSurface] = []
        self.resized: list[tuple[float, float, float]] = []

    def acquire(self, width: float, height: float, pixel_ratio: float) -> RecordingSurface:
        surface = RecordingSurface(advance_ratio=self.advance_ratio)
        self.acquired.append(surface)
        return surface

    def resize(self, surface: RecordingSurface, width: float, height: float, pixel_ratio: float) -> None:
        self.resized.append((width, height, pixel_ratio))

    def create_offscreen(self, pixel_ratio: float) -> RecordingSurface:
        surface = RecordingSurface(advance_ratio=self.advance_ratio)
        surface.scale(pixel_ratio, pixel_ratio)
        return surface


class FailingSurfaceProvider(RecordingSurfaceProvider):
    """Provider whose acquisition always fails."""

    def __init__(self, error: Exception | None = None):
        super().__init__()
        self.error = error

    def acquire(self, width: float, height: float, pixel_ratio: float) -> RecordingSurface:
        if self.error is not None:
            raise self.error
        return None  # type: ignore[return-value]


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp(prefix="mdcard_test_"))


def cleanup_test_dir(path: Path) -> None:
    """Remove a temporary test directory."""
    shutil.rmtree(path, ignore_errors=True)
