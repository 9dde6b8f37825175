"""Pytest configuration and shared fixtures for the mdcard test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os
from pathlib import Path
from typing import Generator

import pytest
from hypothesis import Phase, Verbosity, settings
from utils import RecordingSurface, cleanup_test_dir, create_test_temp_dir

from mdcard.rendering.measure import TextMeasureCache

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose, deadline=None)
settings.register_profile("dev", max_examples=20, deadline=None)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate],
    deadline=None,
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def surface() -> RecordingSurface:
    """Provide a deterministic recording surface (8 px per code point at 16px)."""
    return RecordingSurface()


@pytest.fixture
def cache() -> TextMeasureCache:
    """Provide an empty measurement cache."""
    return TextMeasureCache()


@pytest.fixture
def sample_question() -> str:
    """Provide a question exercising every block kind.

    Returns
    -------
    str
        Markdown question text

    """
    return """# Recursion

What does this function return for `n = 3`?

```python
def f(n):
    return 1 if n == 0 else n * f(n - 1)
```

> Hint: think about the **base case**.

- first *guess*
- second [guess](https://example.com)

---
"""


@pytest.fixture
def sample_answer() -> str:
    """Provide an answer with ordered list and inline formatting.

    Returns
    -------
    str
        Markdown answer text

    """
    return """It returns **6**:

1. `f(3) = 3 * f(2)`
2. `f(2) = 2 * f(1)`
3. `f(1) = 1 * f(0) = 1`
"""
