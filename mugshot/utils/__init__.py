"""Pure Python utilities for Mugshot.

Submodules:
    - dt_utils: Time zones, parsing and the injectable calendar convention
    - math_utils: Progress and averaging calculations

Usage:
    from . import dt_utils
    from .math_utils import calculate_progress
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
