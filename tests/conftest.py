"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Full load, convert and write runs
    pytest -m security      # Path traversal, symlink and SSRF checks

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import copy
import json
import os
import sys

import pytest

# Patch tenacity's sleep before the loader builds its retry wrappers
import tenacity.nap
tenacity.nap.sleep = lambda seconds: None

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    sys.path.insert(1, tests_dir)

from fixtures import (
    EMPTY_SDF,
    SWITCH_SDF,
    NESTED_THING_SDF,
    COLLIDING_KEYS_SDF,
    REFERENCE_SDF,
    CONSTRAINED_PROPERTY_SDF,
    NESTED_DATA_SDF,
    MINIMAL_TM,
    LAMP_TM,
    LAMP_TD,
    SAMPLE_CONFIG,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Full load, convert and write runs")
    config.addinivalue_line("markers", "security: Path traversal, symlink and SSRF checks")


# =============================================================================
# SDF Fixtures
# =============================================================================

@pytest.fixture
def empty_sdf():
    """Empty SDF model."""
    return json.dumps(EMPTY_SDF)


@pytest.fixture
def switch_sdf():
    """Switch object with info block, namespace, property, actions and event."""
    return json.dumps(SWITCH_SDF)


@pytest.fixture
def nested_thing_sdf():
    """Things nesting things and objects."""
    return json.dumps(NESTED_THING_SDF)


@pytest.fixture
def colliding_keys_sdf():
    """Two branches that flatten to the same affordance key."""
    return json.dumps(COLLIDING_KEYS_SDF)


@pytest.fixture
def reference_sdf():
    """Definitions using sdfRef, resolvable and not."""
    return json.dumps(REFERENCE_SDF)


@pytest.fixture
def constrained_property_sdf():
    """Integer property with all five numeric constraints."""
    return json.dumps(CONSTRAINED_PROPERTY_SDF)


@pytest.fixture
def nested_data_sdf():
    """Object, array and referenced data schemas."""
    return json.dumps(NESTED_DATA_SDF)


@pytest.fixture
def temp_sdf_file(tmp_path, switch_sdf):
    """Write the switch model to a temporary *.sdf.json file."""
    sdf_file = tmp_path / "switch.sdf.json"
    sdf_file.write_text(switch_sdf, encoding="utf-8")
    return str(sdf_file)


# =============================================================================
# WoT Fixtures
# =============================================================================

@pytest.fixture
def minimal_tm():
    """Thing Model with only @context and @type."""
    return json.dumps(MINIMAL_TM)


@pytest.fixture
def lamp_tm():
    """Thing Model with namespaces, properties, actions and events."""
    return json.dumps(LAMP_TM)


@pytest.fixture
def lamp_td():
    """Thing Description with forms and a basic security scheme."""
    return json.dumps(LAMP_TD)


@pytest.fixture
def temp_tm_file(tmp_path, lamp_tm):
    """Write the lamp Thing Model to a temporary *.tm.json file."""
    tm_file = tmp_path / "lamp.tm.json"
    tm_file.write_text(lamp_tm, encoding="utf-8")
    return str(tm_file)


@pytest.fixture
def temp_td_file(tmp_path, lamp_td):
    """Write the lamp Thing Description to a temporary *.td.json file."""
    td_file = tmp_path / "lamp.td.json"
    td_file.write_text(lamp_td, encoding="utf-8")
    return str(td_file)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample configuration dictionary."""
    return copy.deepcopy(SAMPLE_CONFIG)


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """Create a temporary configuration file for testing."""
    sample_config["logging"]["file"] = str(tmp_path / "logs" / "test.log")
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config, indent=2))
    return str(config_file)


# =============================================================================
# Utility Fixtures
# =============================================================================

@pytest.fixture
def sdf_parser():
    from formats.sdf import SDFParser
    return SDFParser()


@pytest.fixture
def wot_parser():
    from formats.wot import WoTParser
    return WoTParser()


@pytest.fixture
def forward_converter():
    from converters import SDFToWoTConverter
    return SDFToWoTConverter()


@pytest.fixture
def reverse_converter():
    from converters import WoTToSDFConverter
    return WoTToSDFConverter()
