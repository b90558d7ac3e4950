"""
Centralized test fixtures for the SDF/WoT converter test suite.

This package provides reusable documents for testing:
- SDF models
- WoT Thing Models and Thing Descriptions
- Configuration samples

Usage:
    from fixtures import SWITCH_SDF, LAMP_TM, SAMPLE_CONFIG

Or use the pytest fixtures in conftest.py which import from here.
"""

from .sdf_fixtures import (
    EMPTY_SDF,
    SWITCH_SDF,
    NESTED_THING_SDF,
    COLLIDING_KEYS_SDF,
    REFERENCE_SDF,
    CONSTRAINED_PROPERTY_SDF,
    NESTED_DATA_SDF,
)

from .wot_fixtures import (
    MINIMAL_TM,
    LAMP_TM,
    LAMP_TD,
)

from .config_fixtures import (
    SAMPLE_CONFIG,
    LOADER_CONFIG,
)

__all__ = [
    # SDF
    'EMPTY_SDF',
    'SWITCH_SDF',
    'NESTED_THING_SDF',
    'COLLIDING_KEYS_SDF',
    'REFERENCE_SDF',
    'CONSTRAINED_PROPERTY_SDF',
    'NESTED_DATA_SDF',
    # WoT
    'MINIMAL_TM',
    'LAMP_TM',
    'LAMP_TD',
    # Config
    'SAMPLE_CONFIG',
    'LOADER_CONFIG',
]
