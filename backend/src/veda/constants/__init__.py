"""Configuration constants.

Re-exports all constants for convenient importing:
    from veda.constants import DEFAULT_THRESHOLD, DEFAULT_TOP_K
"""

from veda.constants.search import *  # noqa: F403
from veda.constants.api import *  # noqa: F403
