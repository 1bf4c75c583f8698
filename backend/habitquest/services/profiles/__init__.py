"""
Profiles module
Profile reads and edits, leaderboard and achievements
"""
from . import repository
from . import service

from .service import (
    ensure_profile,
    get_profile,
    edit_profile,
    get_leaderboard,
    get_achievements
)

__all__ = [
    'repository',
    'service',
    'ensure_profile',
    'get_profile',
    'edit_profile',
    'get_leaderboard',
    'get_achievements'
]
