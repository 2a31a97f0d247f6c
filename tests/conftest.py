"""Pytest configuration and shared fixtures for the html2anf test suite."""

from typing import Callable

import pytest
from bs4 import BeautifulSoup, Tag

from html2anf.context import ConversionContext
from html2anf.settings import Settings

# Configure Hypothesis for property-based testing
try:
    import os

    from hypothesis import settings as hypothesis_settings

    hypothesis_settings.register_profile("ci", max_examples=200)
    hypothesis_settings.register_profile("dev", max_examples=50)
    hypothesis_settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))
except ImportError:
    # Hypothesis not installed, property tests are skipped
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def _no_network(monkeypatch):
    """Never let a test reach the network through the default probe."""
    monkeypatch.setenv("HTML2ANF_DISABLE_NETWORK", "1")


@pytest.fixture
def make_context() -> Callable[..., ConversionContext]:
    """Factory for contexts whose resource probe always succeeds."""

    def _make(settings: Settings | None = None, **kwargs) -> ConversionContext:
        kwargs.setdefault("probe", lambda url: True)
        return ConversionContext.create(settings or Settings(), **kwargs)

    return _make


@pytest.fixture
def context(make_context) -> ConversionContext:
    """Context with default settings and an always-true probe."""
    return make_context()


@pytest.fixture
def parse_node() -> Callable[[str], Tag]:
    """Parse markup and return its first element."""

    def _parse(markup: str) -> Tag:
        soup = BeautifulSoup(markup, "html.parser")
        node = soup.find(True)
        assert node is not None
        return node

    return _parse
