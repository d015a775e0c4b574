"""
API Client Gen

Generates typed Python clients from REST API descriptions: one parts type
per endpoint accepting only valid path parameter combinations, plus the code
that turns it into a percent-encoded relative URL.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("api-client-gen")
except PackageNotFoundError:
    __version__ = "0.1.0"

__all__ = ["__version__"]
