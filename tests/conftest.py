"""
Pytest fixtures shared by the unival test suite.
"""
import pytest

from unival.core.config import get_settings
from unival.forms import HtmlAdapter


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so environment overrides made by a test apply to it alone."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def adapter():
    """Default HTML adapter."""
    return HtmlAdapter()


@pytest.fixture
def signup_config():
    """Field config list for a small signup form."""
    return [
        {"name": "email", "rules": "required|email", "label": "Email address"},
        {"name": "password", "rules": "required|password|min:8"},
        {"name": "age", "rules": {"type": "number", "minValue": 18, "maxValue": 120}},
        {"name": "bio", "rules": "max:280", "ui": {"control": "textarea", "hint": "Optional"}},
        {"type": "submit", "value": "Create account", "className": "btn"},
    ]


@pytest.fixture
def signup_rules():
    """Rules mapping equivalent to the signup config."""
    return {
        "email": "required|email",
        "password": "required|min:8",
        "age": "number|minValue:18|maxValue:120",
    }
