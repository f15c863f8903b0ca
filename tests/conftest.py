"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from typing import Callable

import pytest

from config.settings import Settings
from tests.factories import build_workbook


# ===================
# FIXTURES
# ===================

@pytest.fixture
def make_workbook() -> Callable[..., bytes]:
    """
    Usage:
        def test_something(make_workbook):
            content = make_workbook([{"Título": "Casa", "Ciudad": "Cali"}])
    """
    return build_workbook


@pytest.fixture
def import_settings() -> Settings:
    """Settings with the default import limits, independent of the environment."""
    return Settings(
        environment="development",
        import_max_rows=500,
        import_preview_sample_size=5,
        import_contains_min_length=4,
        import_default_currency="COP",
    )


@pytest.fixture
def chapinero_row() -> dict:
    """Row from a typical Bogotá agency export."""
    return {
        "Título": "Apto en Chapinero",
        "Precio Venta": "$350.000.000",
        "Ciudad": "Bogotá",
        "Habitac.": "3",
    }
