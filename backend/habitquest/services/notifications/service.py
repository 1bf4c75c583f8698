"""
Notifications Service - Message formatting and delivery
Centralizes the messages pushed to a user when a session ends
"""
import logging
from typing import Callable, Optional, Dict, Any

logger = logging.getLogger(__name__)


# ============================================================================
# MESSAGE FORMATTING
# ============================================================================

def format_session_started(habit_title: str, duration_minutes: int) -> str:
    """
    Format the message for a newly started session

    Args:
        habit_title: The habit title
        duration_minutes: Session length

    Returns:
        Formatted message
    """
    return f"⏱️ STARTED: {habit_title}\n\n{duration_minutes} minute(s) on the clock. Stay with it!"


def format_session_completed(habit_title: str, outcome: Dict[str, Any]) -> str:
    """
    Format the message for a session that ran to zero

    Args:
        habit_title: The habit title
        outcome: Result dict from the completion (status, message, data)

    Returns:
        Formatted message
    """
    status = outcome.get("status")

    if status == "success":
        reward = (outcome.get("data") or {}).get("reward") or {}
        habit = (outcome.get("data") or {}).get("habit") or {}
        return (
            f"✅ COMPLETED: {habit_title}\n\n"
            f"+{reward.get('coins', 0)} coins, +{reward.get('xp', 0)} XP. "
            f"Streak: {habit.get('streak', 0)} 🔥"
        )

    elif status == "partial":
        return f"⚠️ COMPLETED WITH ISSUES: {habit_title}\n\n{outcome.get('message', '')}"

    else:
        return f"❌ NOT SAVED: {habit_title}\n\n{outcome.get('message', 'Unknown error')}"


def format_session_cancelled(habit_title: str) -> str:
    """Format the message for a cancelled session"""
    return f"🛑 CANCELLED: {habit_title}\n\nNo reward this time. Your streak is unchanged."


# ============================================================================
# DELIVERY
# ============================================================================

class NotificationService:
    """
    Pushes session messages to users through a pluggable sender

    Without a sender, messages are only logged at debug level.
    """

    def __init__(self, send_callback: Optional[Callable[[str, str], bool]] = None):
        """
        Args:
            send_callback: Called as send_callback(user_id, message); returns
                           whether the message was accepted
        """
        self.send_callback = send_callback

    def send_notification(self, user_id: str, message: str) -> bool:
        """
        Deliver one message to a user

        A failing sender is logged and reported as False; it never reaches
        the session that triggered the message.
        """
        if self.send_callback is None:
            logger.debug(f"[NOTIFY] No sender configured, dropping message for {user_id}")
            return False

        try:
            delivered = bool(self.send_callback(user_id, message))
        except Exception as e:
            logger.error(f"[NOTIFY] Sender raised for {user_id}: {e}")
            return False

        if delivered:
            logger.info(f"[NOTIFY] Message delivered to {user_id}")
        else:
            logger.warning(f"[NOTIFY] Sender refused message for {user_id}")
        return delivered

    def send_session_started(self, user_id: str, habit_title: str, duration_minutes: int) -> bool:
        return self.send_notification(user_id, format_session_started(habit_title, duration_minutes))

    def send_session_completed(self, user_id: str, habit_title: str,
                               outcome: Optional[Dict[str, Any]] = None) -> bool:
        return self.send_notification(user_id, format_session_completed(habit_title, outcome or {}))

    def send_session_cancelled(self, user_id: str, habit_title: str) -> bool:
        return self.send_notification(user_id, format_session_cancelled(habit_title))
