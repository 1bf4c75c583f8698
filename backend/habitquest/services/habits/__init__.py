"""
Habits module - Core habit management functionality
"""
from . import repository
from . import service
from . import streaks

# Export commonly used functions for convenience
from .service import (
    get_owned_habit,
    list_habits,
    create_habit,
    edit_habit,
    delete_habit,
    complete_habit
)

from .streaks import (
    is_streak_lapsed,
    check_lapsed_streaks
)

__all__ = [
    # Modules
    'repository',
    'service',
    'streaks',

    # Service functions
    'get_owned_habit',
    'list_habits',
    'create_habit',
    'edit_habit',
    'delete_habit',
    'complete_habit',

    # Streak functions
    'is_streak_lapsed',
    'check_lapsed_streaks'
]
