"""
ZIGROUTE Core Module
"""

from zigroute.core.route import Route
from zigroute.core.router import Router

__all__ = ["Route", "Router"]
