"""
Scheduler module
Background job scheduling for session countdowns and maintenance tasks
"""
from .service import get_scheduler, start_scheduler, stop_scheduler
from . import jobs

__all__ = ['get_scheduler', 'start_scheduler', 'stop_scheduler', 'jobs']
