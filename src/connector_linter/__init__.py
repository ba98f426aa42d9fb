"""Top-level package for connector-linter.

Validates Power Platform custom connector files (settings.json,
apiProperties.json, apiDefinition.swagger.json) against their JSON schemas.

License: MIT
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("connector-linter")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"

__all__ = ["__version__"]
