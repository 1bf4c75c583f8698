"""
Business logic services
"""
from . import habits
from . import economy
from . import profiles
from . import teams
from . import stats
from . import onboarding
from . import notifications
from . import sessions
from . import scheduler

__all__ = [
    'habits',
    'economy',
    'profiles',
    'teams',
    'stats',
    'onboarding',
    'notifications',
    'sessions',
    'scheduler'
]
