"""Pytest configuration and shared fixtures for connector-linter tests."""

import logging
import os
import tempfile

# Keep test logs out of the user's config directory. Must run before any
# connector_linter module is imported, since modules create loggers at
# import time.
os.environ.setdefault(
    "CONNECTOR_LINTER_LOG_DIR",
    tempfile.mkdtemp(prefix="connector-linter-test-logs-"),
)

import pytest  # noqa: E402

from connector_linter.config import SettingsContext, ValidationSettings  # noqa: E402
from connector_linter.core.orchestrator import ValidationOrchestrator  # noqa: E402


@pytest.fixture(autouse=True)
def enable_log_propagation():
    """Enable log propagation so caplog sees connector_linter records.

    The root ``connector_linter`` logger is created with propagate=False in
    production code.
    """
    original_propagation = {}
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("connector_linter"):
            logger = logging.getLogger(name)
            original_propagation[name] = logger.propagate
            logger.propagate = True

    yield

    for name, propagate_value in original_propagation.items():
        logging.getLogger(name).propagate = propagate_value


@pytest.fixture
def cache_dir(tmp_path):
    """Empty schema cache directory (not created yet)."""
    return tmp_path / "cache"


@pytest.fixture
def settings_context():
    """Settings with extended validation enabled (the default)."""
    return SettingsContext(ValidationSettings(extended_validation=True))


@pytest.fixture
def orchestrator(cache_dir, settings_context):
    """Orchestrator wired to the bundled schemas and an empty cache."""
    return ValidationOrchestrator.create_default(cache_dir, settings_context)


@pytest.fixture
def valid_api_properties():
    """apiProperties.json content accepted by base and extended schemas."""
    return """{
  // connection and branding
  "properties": {
    "connectionParameters": {
      "api_key": {"type": "securestring"},
    },
    "iconBrandColor": "#da3b01",
    "capabilities": ["actions"],
    "publisher": "Contoso",
    "stackOwner": "Contoso Ltd",
  },
}
"""


@pytest.fixture
def valid_swagger():
    """apiDefinition.swagger.json content accepted by the extended schema."""
    return """{
  "swagger": "2.0",
  "info": {
    "title": "Contoso Weather",
    "description": "Current weather for any city.",
    "version": "1.0"
  },
  "host": "api.contoso.com",
  "basePath": "/",
  "schemes": ["https"],
  "paths": {
    "/weather": {
      "get": {
        "summary": "Get weather",
        "description": "Returns the current weather.",
        "operationId": "GetWeather",
        "responses": {"200": {"description": "OK"}}
      }
    }
  },
  "x-ms-connector-metadata": [
    {"propertyName": "Website", "propertyValue": "https://contoso.com"},
    {"propertyName": "Categories", "propertyValue": "Data;Productivity"}
  ]
}
"""
