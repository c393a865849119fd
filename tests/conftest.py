"""
fieldclip - Pytest Configuration
Shared fixtures for all tests
"""

import numpy as np
import pandas as pd
import pytest

from fieldclip.config import OutputSettings, ProfileSettings


@pytest.fixture
def settings():
    """Default profiling settings with a fixed sampling seed"""
    return ProfileSettings(random_seed=0)


@pytest.fixture
def output(tmp_path):
    """Sink locations inside a temporary directory"""
    return OutputSettings(output_dir=str(tmp_path / "clip"))


@pytest.fixture
def mixed_df():
    """Small table with numeric, categorical and opaque columns"""
    rng = np.random.default_rng(42)
    return pd.DataFrame({
        'yield': rng.normal(loc=3.0, scale=0.5, size=60),
        'crop': rng.choice(['rice', 'wheat', 'maize'], size=60),
        'irrigated': rng.choice([True, False], size=60),
        'sown': pd.date_range('2020-01-01', periods=60, freq='D'),
    })
