from __future__ import annotations

from pathlib import Path

import pytest

from docspark.parser import ComponentParser, SourceProvider
from tests._fixtures.component_builder import ComponentBuilder


@pytest.fixture
def component_builder(tmp_path: Path) -> ComponentBuilder:
    """Provide a reusable component project rooted at the pytest tmp_path."""
    return ComponentBuilder(tmp_path)


@pytest.fixture
def provider() -> SourceProvider:
    return SourceProvider()


@pytest.fixture
def component_parser(provider: SourceProvider) -> ComponentParser:
    return ComponentParser(provider=provider)
