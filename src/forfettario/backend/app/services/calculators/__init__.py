"""Domain-specific calculation helpers."""

from .breakdown import (
    ACTIVITY_CATEGORY_FALLBACK,
    CONTRIBUTION_SCHEME_FALLBACK,
    compute_breakdown,
)
from .utils import parse_rate_percent

__all__ = [
    "ACTIVITY_CATEGORY_FALLBACK",
    "CONTRIBUTION_SCHEME_FALLBACK",
    "compute_breakdown",
    "parse_rate_percent",
]
