"""
Stats module
Read-only dashboard aggregates
"""
from .service import (
    NO_DATA_LABEL,
    count_completed_today,
    highest_streak,
    completion_percentage,
    format_percentage,
    compute_stats,
    get_aggregate_stats
)

__all__ = [
    'NO_DATA_LABEL',
    'count_completed_today',
    'highest_streak',
    'completion_percentage',
    'format_percentage',
    'compute_stats',
    'get_aggregate_stats'
]
