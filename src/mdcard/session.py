#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdcard/session.py
"""Render session: one estimate-then-paint pass per card.

A ``RenderSession`` owns the state that the layout engine shares across
paint steps: the measurement cache, the paint task queue, the active theme
and the render options. Nothing is module-global, so independent sessions
never observe each other's caches.

Pipeline
--------
1. Acquire a drawing surface from the provider (fatal on failure)
2. Scale the surface by the device pixel ratio, once
3. Estimate the card height on an offscreen measurement surface
4. Grow the surface when the estimate exceeds the viewport height
5. Queue chrome, question, answer and watermark paint tasks by priority
6. Drain the queue, yielding to the host between tasks

"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from mdcard.constants import PRIORITY_ANSWER, PRIORITY_CHROME, PRIORITY_QUESTION, PRIORITY_WATERMARK
from mdcard.exceptions import InvalidOptionsError, RenderingError, SurfaceUnavailableError
from mdcard.options.markdown import MarkdownParserOptions
from mdcard.options.render import RenderOptions
from mdcard.rendering.measure import TextMeasureCache
from mdcard.rendering.painter import MarkdownPainter
from mdcard.rendering.scheduling import RenderQueue, YieldToHost
from mdcard.rendering.surface import DrawingSurface, PillowSurfaceProvider, SurfaceProvider
from mdcard.rendering.templates import CardContent, create_template
from mdcard.rendering.themes import Theme, get_theme
from mdcard.utils.text import decode_field

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """Outcome of one render pass.

    Parameters
    ----------
    surface : DrawingSurface
        The painted surface
    width, height : float
        Logical card size
    pixel_ratio : float
        Device pixel ratio the surface was scaled by
    theme : str
        Name of the theme used
    failed_tasks : tuple of str
        Names of paint tasks that raised; empty on a clean pass

    """

    surface: DrawingSurface
    width: float
    height: float
    pixel_ratio: float
    theme: str
    failed_tasks: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """Whether every paint task succeeded."""
        return not self.failed_tasks

    def to_image(self) -> Image.Image:
        """Export the painted surface as a Pillow image.

        Raises
        ------
        RenderingError
            If the surface cannot export images

        """
        to_image = getattr(self.surface, "to_image", None)
        if to_image is None:
            raise RenderingError(
                f"Surface of type {type(self.surface).__name__} cannot be exported", rendering_stage="export"
            )
        return to_image()


class RenderSession:
    """Render question/answer cards with shared cache and queue state.

    Parameters
    ----------
    options : RenderOptions, optional
        Card geometry, template and labels
    parser_options : MarkdownParserOptions, optional
        Options for parsing card text
    yield_to_host : callable, optional
        Coroutine function awaited between paint tasks
    painter : MarkdownPainter, optional
        Painter for node sequences; pass an instrumented one to collect
        per-kind visit counts

    Examples
    --------
        >>> session = RenderSession(RenderOptions(template="book"))
        >>> card = session.parse("What is **2 + 2**?", "4")
        >>> result = session.render_sync(card)
        >>> result.to_image().save("card.png")  # doctest: +SKIP

    """

    def __init__(
        self,
        options: Optional[RenderOptions] = None,
        parser_options: Optional[MarkdownParserOptions] = None,
        yield_to_host: Optional[YieldToHost] = None,
        painter: Optional[MarkdownPainter] = None,
    ):
        """Initialize the session and resolve the theme."""
        if options is not None and not isinstance(options, RenderOptions):
            raise InvalidOptionsError("RenderSession", RenderOptions, type(options))
        self.options: RenderOptions = options or RenderOptions()
        self.parser_options = parser_options
        self.theme: Theme = get_theme(self.options.template)
        self.cache = TextMeasureCache()
        self.queue = RenderQueue(yield_to_host)
        self.painter = painter or MarkdownPainter()
        self._rendering = False

    def set_theme(self, name: str) -> Theme:
        """Switch the active theme. Parsed cards stay valid.

        Raises
        ------
        ValidationError
            If ``name`` is not a registered theme

        """
        self.theme = get_theme(name)
        self.options = self.options.create_updated(template=self.theme.name)
        return self.theme

    def parse(self, question: str, answer: str, watermark: Optional[bool] = None) -> CardContent:
        """Parse card text, decoding percent-encoded input when configured."""
        if self.options.percent_encoded:
            question, answer = decode_field(question), decode_field(answer)
        return CardContent.from_markdown(
            question,
            answer,
            watermark=self.options.watermark if watermark is None else watermark,
            parser_options=self.parser_options,
        )

    def _acquire(self, provider: SurfaceProvider) -> DrawingSurface:
        options = self.options
        try:
            surface = provider.acquire(options.width, options.viewport_height, options.pixel_ratio)
        except SurfaceUnavailableError:
            raise
        except Exception as e:
            raise SurfaceUnavailableError(original_error=e) from e
        if surface is None:
            raise SurfaceUnavailableError()
        return surface

    async def render(self, card: CardContent, provider: Optional[SurfaceProvider] = None) -> RenderResult:
        """Run one estimate-then-paint pass.

        Parameters
        ----------
        card : CardContent
            Parsed card
        provider : SurfaceProvider, optional
            Surface source; defaults to a Pillow provider using the
            configured font overrides

        Returns
        -------
        RenderResult
            Painted surface and its logical size

        Raises
        ------
        SurfaceUnavailableError
            If no surface could be acquired or sized
        RenderingError
            If a render pass is already running on this session

        """
        if self._rendering:
            raise RenderingError("A render pass is already running on this session", rendering_stage="session")

        self._rendering = True
        try:
            return await self._render(card, provider or PillowSurfaceProvider(self.options.font_map))
        finally:
            self._rendering = False

    async def _render(self, card: CardContent, provider: SurfaceProvider) -> RenderResult:
        options = self.options
        ratio = options.pixel_ratio

        surface = self._acquire(provider)
        surface.scale(ratio, ratio)

        template = create_template(self.theme, options, self.painter)
        offscreen = provider.create_offscreen(ratio)
        estimated = template.estimate_height(card, offscreen, self.cache)
        height = max(float(options.viewport_height), float(math.ceil(estimated)))

        if height > options.viewport_height:
            logger.debug("Growing surface from %s to %s logical pixels", options.viewport_height, height)
            try:
                provider.resize(surface, options.width, height, ratio)
            except SurfaceUnavailableError:
                raise
            except Exception as e:
                raise SurfaceUnavailableError("Drawing surface could not be resized", original_error=e) from e

        queue = self.queue
        queue.clear()
        queue.add(lambda: template.paint_chrome(surface, self.cache, height), PRIORITY_CHROME, "chrome")
        queue.add(lambda: template.paint_question(surface, self.cache, card.question), PRIORITY_QUESTION, "question")
        queue.add(lambda: template.paint_answer(surface, self.cache, card.answer), PRIORITY_ANSWER, "answer")
        if card.watermark:
            queue.add(lambda: template.paint_watermark(surface, self.cache, height), PRIORITY_WATERMARK, "watermark")

        await queue.drain()
        logger.debug(
            "Rendered %s card %sx%s (cache: %d entries, %d hits, %d misses)",
            self.theme.name,
            options.width,
            height,
            len(self.cache),
            self.cache.hits,
            self.cache.misses,
        )

        return RenderResult(
            surface=surface,
            width=float(options.width),
            height=height,
            pixel_ratio=ratio,
            theme=self.theme.name,
            failed_tasks=tuple(queue.failed),
        )

    def render_sync(self, card: CardContent, provider: Optional[SurfaceProvider] = None) -> RenderResult:
        """Run ``render`` to completion on a fresh event loop."""
        return asyncio.run(self.render(card, provider))
