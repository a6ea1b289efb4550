"""
Shared fixtures for Prospector tests.
"""
import pytest

from prospector.models.niche import Niche


@pytest.fixture
def chainsaw_niche() -> Niche:
    """A single-phrase niche for predictable scores."""
    return Niche(
        id="test_chainsaw",
        name="Refacciones de motosierra",
        description="Talleres y distribuidores de refacciones para motosierras.",
        keywords=("refacciones para motosierras",),
        negative_keywords=("truper", "home depot"),
    )
