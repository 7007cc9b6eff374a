"""
Pure snapshot transitions.

Each function takes the current snapshot and a response and returns a new
snapshot. No I/O, no clock, no mutation of the inputs.
"""

from .mutations import reconcile_star_mutation
from .pagination import reconcile_page

__all__ = ["reconcile_page", "reconcile_star_mutation"]
