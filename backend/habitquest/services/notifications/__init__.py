"""
Notifications module
Message formatting and delivery for session outcomes
"""
from .service import (
    NotificationService,
    format_session_started,
    format_session_completed,
    format_session_cancelled
)

__all__ = [
    'NotificationService',
    'format_session_started',
    'format_session_completed',
    'format_session_cancelled'
]
