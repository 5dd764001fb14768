"""
Pytest configuration for Stereocode test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Builders for method and class facts
- Temporary facts files
"""

import json
import os
from pathlib import Path

import pytest

from stereocode.cli.config import CLIConfig
from stereocode.config import Language
from stereocode.logging_config import setup_logging
from stereocode.schemas import ClassFacts, MethodFacts


TEST_FILES_DIR = Path(__file__).parent / "stereo_files"


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Configure pytest for quiet, machine-readable runs."""
    os.environ.setdefault("STEREOCODE_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)


@pytest.fixture(autouse=True)
def reset_cli_mode():
    """CLI mode is class-level state; never let one test leak it into another."""
    CLIConfig.set_machine_mode(None)
    yield
    CLIConfig.set_machine_mode(None)


# ============================================================================
# FACT BUILDERS
# ============================================================================

@pytest.fixture
def make_method():
    """
    Build MethodFacts with defaults for everything not given.

    Usage:
        def test_something(make_method):
            m = make_method(return_type_raw="int", attribute_returned_directly=True)
    """
    counter = {"n": 0}

    def build(**overrides) -> MethodFacts:
        counter["n"] += 1
        fields = {
            "name": f"method{counter['n']}",
            "unit_id": 1,
            "location_id": f"/src:unit/src:class[1]/src:function[{counter['n']}]",
        }
        fields.update(overrides)
        return MethodFacts(**fields)

    return build


@pytest.fixture
def make_class():
    """Build ClassFacts with defaults for everything not given."""

    def build(**overrides) -> ClassFacts:
        fields = {
            "unit_id": 1,
            "location": "/src:unit/src:class[1]",
            "language": Language.CPP,
            "name": "Widget",
            "structure_kind": "class",
        }
        fields.update(overrides)
        return ClassFacts(**fields)

    return build


# ============================================================================
# FILE FIXTURES
# ============================================================================

@pytest.fixture
def sample_facts_path() -> Path:
    return TEST_FILES_DIR / "sample_facts.json"


@pytest.fixture
def write_facts(tmp_path):
    """Write a facts document (dict) to a temporary JSON file and return its path."""

    def write(document: dict, name: str = "facts.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return write
