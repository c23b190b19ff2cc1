"""Settings for the mercury client.

Only the API key and the endpoint are configurable, both through the
environment (optionally seeded from a ``.env`` file).
"""

from __future__ import annotations

import logging
import os

from dotenv import find_dotenv, load_dotenv

from mercury.errors import ConfigurationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------
ENDPOINT = "https://mercury.postlight.com/parser"

# Query parameter carrying the target article URL
URL_PARAM = "url"

API_KEY_HEADER = "X-Api-Key"

# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------
API_KEY_ENV = "MERCURY_API_KEY"
ENDPOINT_ENV = "MERCURY_ENDPOINT"


def load_api_key(env_file: str | os.PathLike[str] | None = None) -> str:
    """Return the API key from ``MERCURY_API_KEY``.

    *env_file* (or a ``.env`` found from the working directory) is loaded
    first; variables already present in the environment win.

    Raises:
        ConfigurationError: The variable is unset or empty.
    """
    path = env_file or find_dotenv(usecwd=True)
    if path and load_dotenv(path):
        logger.debug("Loaded environment from %s", path)
    key = os.getenv(API_KEY_ENV, "")
    if not key:
        raise ConfigurationError(f"{API_KEY_ENV} is not set")
    return key


def load_endpoint() -> str:
    """Return ``MERCURY_ENDPOINT`` if set, otherwise the public endpoint."""
    return os.getenv(ENDPOINT_ENV) or ENDPOINT
