import sys
import os

import pytest

_tests_dir = os.path.dirname(os.path.abspath(__file__))
_src_dir   = os.path.abspath(os.path.join(_tests_dir, '..'))

# Run against the source tree when the package is not installed.
sys.path.insert(0, _src_dir)

import safe_yaml  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_defaults():
    """Every test starts and ends with the factory policy."""
    safe_yaml.restore_defaults()
    yield
    safe_yaml.restore_defaults()
