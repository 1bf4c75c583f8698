"""
Session Manager - Timed habit sessions
Owns the single active session per user and its one-second countdown
"""
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock
from typing import Callable, Optional, Dict, Any
import logging

from apscheduler.jobstores.base import JobLookupError
from apscheduler.triggers.interval import IntervalTrigger

from habitquest.core.constants import (
    DEFAULT_DURATION_MINUTES,
    SESSION_JOB_PREFIX,
    SESSION_TICK_SECONDS
)
from habitquest.core.exceptions import (
    HabitQuestException,
    NoActiveSessionError,
    SessionAlreadyActiveError
)
from habitquest.services.habits.service import complete_habit, get_owned_habit
from habitquest.services.notifications import NotificationService
from habitquest.utils.timezone import get_utc_now

logger = logging.getLogger(__name__)


@dataclass
class CompletionSession:
    """A habit in progress; lives in memory only"""
    user_id: str
    habit_id: str
    habit_title: str
    duration_seconds: int
    remaining_seconds: int
    started_at: datetime = field(default_factory=get_utc_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "habit_id": self.habit_id,
            "habit_title": self.habit_title,
            "duration_seconds": self.duration_seconds,
            "remaining_seconds": self.remaining_seconds,
            "started_at": self.started_at.isoformat()
        }


def session_job_id(user_id: str) -> str:
    """Scheduler job id of a user's countdown"""
    return f"{SESSION_JOB_PREFIX}{user_id}"


class SessionManager:
    """
    Per-user session state plus the countdown jobs that drive it

    Without a scheduler nothing ticks on its own and tick() has to be called
    by the owner (tests, simulations).
    """

    def __init__(self, scheduler=None,
                 complete: Callable[[str, str], Dict[str, Any]] = complete_habit,
                 notification_service: Optional[NotificationService] = None):
        """
        Args:
            scheduler: APScheduler scheduler that runs the countdown jobs
            complete: Called as complete(user_id, habit_id) when a session reaches zero
            notification_service: Receives start/complete/cancel messages
        """
        self.scheduler = scheduler
        self._complete = complete
        self.notifications = notification_service or NotificationService()
        self._sessions: Dict[str, CompletionSession] = {}
        self._last_outcomes: Dict[str, Dict[str, Any]] = {}
        self._lock = Lock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_session(self, user_id: str) -> Optional[CompletionSession]:
        with self._lock:
            return self._sessions.get(user_id)

    def get_last_outcome(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Result of the user's most recent session that ran to zero"""
        with self._lock:
            return self._last_outcomes.get(user_id)

    def active_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, user_id: str, habit_id: str) -> Dict[str, Any]:
        """
        Start a timed session of a habit

        Returns:
            Dict with status, message and session data

        Raises:
            SessionAlreadyActiveError: If the user already has a session running
            HabitNotFoundError, NotOwnerError: If the habit is missing or not the caller's
        """
        active = self.get_session(user_id)
        if active is not None:
            raise SessionAlreadyActiveError(
                f"'{active.habit_title}' is already in progress. Finish or cancel it first"
            )

        habit = get_owned_habit(user_id, habit_id)
        duration_minutes = habit.get("duration_minutes") or DEFAULT_DURATION_MINUTES

        with self._lock:
            # Re-checked under the lock: the habit lookup above is a store round trip
            active = self._sessions.get(user_id)
            if active is not None:
                raise SessionAlreadyActiveError(
                    f"'{active.habit_title}' is already in progress. Finish or cancel it first"
                )
            session = CompletionSession(
                user_id=user_id,
                habit_id=habit_id,
                habit_title=habit["title"],
                duration_seconds=duration_minutes * 60,
                remaining_seconds=duration_minutes * 60
            )
            self._sessions[user_id] = session
            self._last_outcomes.pop(user_id, None)

        self._schedule_countdown(user_id)
        logger.info(f"[SESSION] {user_id} started '{habit['title']}' for {duration_minutes} min")
        self.notifications.send_session_started(user_id, habit["title"], duration_minutes)

        return {
            "status": "success",
            "message": f"Started '{habit['title']}' ({duration_minutes} min)",
            "data": session.to_dict(),
            "stale": []
        }

    def tick(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Advance a user's session by one second

        At zero the session is removed, its countdown stopped and the habit
        completed.

        Returns:
            The completion outcome when this tick finished the session, else None
        """
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                return None
            session.remaining_seconds -= 1
            if session.remaining_seconds > 0:
                return None
            del self._sessions[user_id]

        self._stop_countdown(user_id)
        return self._finish(session)

    def cancel(self, user_id: str) -> Dict[str, Any]:
        """
        Abandon the user's session without completing it

        Raises:
            NoActiveSessionError: If nothing is in progress
        """
        with self._lock:
            session = self._sessions.pop(user_id, None)
        if session is None:
            raise NoActiveSessionError("No habit is in progress")

        self._stop_countdown(user_id)
        logger.info(f"[SESSION] {user_id} cancelled '{session.habit_title}' "
                    f"with {session.remaining_seconds}s left")
        self.notifications.send_session_cancelled(user_id, session.habit_title)

        return {
            "status": "success",
            "message": f"'{session.habit_title}' cancelled. No reward was given",
            "data": session.to_dict(),
            "stale": []
        }

    def cancel_all(self) -> int:
        """Drop every session and countdown (shutdown)"""
        with self._lock:
            user_ids = list(self._sessions)
            self._sessions.clear()
        for user_id in user_ids:
            self._stop_countdown(user_id)
        return len(user_ids)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _finish(self, session: CompletionSession) -> Dict[str, Any]:
        try:
            outcome = self._complete(session.user_id, session.habit_id)
        except HabitQuestException as e:
            logger.error(f"[SESSION] Completing '{session.habit_title}' for {session.user_id} failed: {e}")
            outcome = {
                "status": "error",
                "message": f"Completing '{session.habit_title}' failed: {e}",
                "stale": []
            }

        with self._lock:
            self._last_outcomes[session.user_id] = outcome

        logger.info(f"[SESSION] {session.user_id} finished '{session.habit_title}' ({outcome['status']})")
        self.notifications.send_session_completed(session.user_id, session.habit_title, outcome)
        return outcome

    def _schedule_countdown(self, user_id: str) -> None:
        if self.scheduler is None:
            return
        self.scheduler.add_job(
            func=self.tick,
            trigger=IntervalTrigger(seconds=SESSION_TICK_SECONDS),
            args=[user_id],
            id=session_job_id(user_id),
            name=f"Session countdown for {user_id}",
            replace_existing=True
        )

    def _stop_countdown(self, user_id: str) -> None:
        if self.scheduler is None:
            return
        try:
            self.scheduler.remove_job(session_job_id(user_id))
        except JobLookupError:
            logger.debug(f"[SESSION] No countdown job left for {user_id}")
