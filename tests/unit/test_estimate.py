#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for content height estimation."""

import pytest
from hypothesis import given
from hypothesis import strategies as st
from utils import RecordingSurface

from mdcard.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    Link,
    List,
    Paragraph,
    Strong,
    Text,
    ThematicBreak,
)
from mdcard.constants import ESTIMATE_HEADING_HEIGHT, ESTIMATE_SAFETY_MARGIN, NODE_SPACING
from mdcard.rendering.estimate import estimate_height
from mdcard.rendering.measure import TextMeasureCache
from mdcard.rendering.painter import MarkdownPainter, RenderContext
from mdcard.rendering.themes import THEMES, get_theme

short_text = st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=40)

inline_nodes = st.recursive(
    st.one_of(st.builds(Text, short_text), st.builds(Code, short_text)),
    lambda children: st.one_of(
        st.builds(Strong, st.lists(children, max_size=3).map(tuple)),
        st.builds(Emphasis, st.lists(children, max_size=3).map(tuple)),
        st.builds(Link, st.lists(children, max_size=3).map(tuple), st.just("https://example.com")),
    ),
    max_leaves=6,
)
inline_runs = st.lists(inline_nodes, max_size=4).map(tuple)

block_nodes = st.recursive(
    st.one_of(
        st.builds(Paragraph, inline_runs),
        st.builds(Heading, st.integers(min_value=-1, max_value=9), inline_runs),
        st.builds(CodeBlock, short_text),
        st.just(ThematicBreak()),
    ),
    lambda children: st.one_of(
        st.builds(BlockQuote, st.lists(children, max_size=3).map(tuple)),
        st.builds(
            List,
            st.lists(st.lists(children, max_size=3).map(tuple), max_size=3).map(tuple),
            st.booleans(),
        ),
    ),
    max_leaves=8,
)


def painted_height(nodes, theme, width: float) -> float:
    context = RenderContext(RecordingSurface(), TextMeasureCache(), 0, 0, width, theme)
    return MarkdownPainter().render_nodes(context, nodes)


@pytest.mark.unit
class TestEstimateHeight:
    """Test that estimates bound the painted height."""

    @pytest.mark.parametrize("name", list(THEMES))
    @given(nodes=st.lists(block_nodes, max_size=5), width=st.integers(min_value=40, max_value=400))
    def test_estimate_never_below_painted_height(self, name: str, nodes: list, width: int) -> None:
        """Test the lower bound for arbitrary trees under every theme."""
        theme = get_theme(name)
        estimate = estimate_height(nodes, 0, 0, width, theme, surface=RecordingSurface())
        assert estimate >= painted_height(nodes, theme, width)

    def test_empty_input_is_just_the_margin(self) -> None:
        """Test that nothing to paint estimates to the safety margin."""
        assert estimate_height([], 0, 0, 300, get_theme(), surface=RecordingSurface()) == ESTIMATE_SAFETY_MARGIN

    def test_estimate_is_relative_to_start(self) -> None:
        """Test that the start offset does not change the height."""
        nodes = [Paragraph((Text("some words " * 10),))]
        theme = get_theme()
        at_top = estimate_height(nodes, 0, 0, 200, theme, surface=RecordingSurface())
        lower = estimate_height(nodes, 0, 500, 200, theme, surface=RecordingSurface())
        assert at_top == lower

    def test_heading_floor(self) -> None:
        """Test that an empty heading still reserves the heading floor."""
        nodes = [Heading(6)]
        estimate = estimate_height(nodes, 0, 0, 300, get_theme(), surface=RecordingSurface())
        assert estimate == ESTIMATE_HEADING_HEIGHT + NODE_SPACING + ESTIMATE_SAFETY_MARGIN

    def test_uses_supplied_cache(self, cache: TextMeasureCache) -> None:
        """Test that an empty cache passed in is the one filled."""
        estimate_height([Paragraph((Text("abc"),))], 0, 0, 300, get_theme(), surface=RecordingSurface(), cache=cache)
        assert len(cache) > 0

    def test_default_measurement_surface(self) -> None:
        """Test estimating without a surface uses a Pillow scratch surface."""
        assert estimate_height([Paragraph((Text("hello"),))], 0, 0, 300, get_theme()) > 0

    def test_unsupported_objects_have_no_height(self) -> None:
        """Test that non-node objects are skipped."""
        theme = get_theme()
        assert estimate_height([object()], 0, 0, 300, theme, surface=RecordingSurface()) == ESTIMATE_SAFETY_MARGIN
