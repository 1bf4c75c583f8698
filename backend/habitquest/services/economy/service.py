"""
Economy Service - Coin-priced actions
Streak recovery, team creation and team membership
"""
from typing import Optional, Dict, Any
import logging

from habitquest.core.constants import (
    ROLE_LEADER,
    ROLE_MEMBER,
    TEAM_CREATION_COST,
    TEAM_JOIN_COST,
    VIEW_HABITS,
    VIEW_PROFILE,
    VIEW_STATS,
    VIEW_TEAMS
)
from habitquest.core.exceptions import (
    AlreadyTeamMemberError,
    DatabaseError,
    HabitQuestException,
    InsufficientFundsError,
    InvalidTeamDataError,
    PreconditionError,
    StreakNotRecoverableError,
    TeamNotFoundError
)
from habitquest.services.habits import repository as habit_repository
from habitquest.services.habits.service import get_owned_habit
from habitquest.services.teams import repository as team_repository
from . import wallet

logger = logging.getLogger(__name__)


# ============================================================================
# STREAK RECOVERY
# ============================================================================

def get_recovery_cost(user_id: str, habit_id: str) -> Dict[str, Any]:
    """
    Get what recovering a habit's streak would cost right now

    Returns:
        Dict with status, cost, breaks count and whether recovery is available
    """
    habit = get_owned_habit(user_id, habit_id)
    return {
        "status": "success",
        "habit_id": habit_id,
        "cost": wallet.habit_recovery_cost(habit),
        "streak_breaks_count": habit.get("streak_breaks_count") or 0,
        "recoverable": _recovery_block_reason(habit) is None
    }


def _recovery_block_reason(habit: Dict[str, Any]) -> Optional[str]:
    if not habit.get("last_completion_date"):
        return f"'{habit['title']}' has never been completed, so there is no streak to recover"
    streak = habit.get("streak") or 0
    if streak != 0:
        return f"'{habit['title']}' still has an active streak of {streak}"
    return None


def _undo_recovery_break(habit_id: str, breaks: int) -> None:
    # Only takes back our own break; a count that moved on since is left alone
    try:
        restored = habit_repository.update_habit_if_unchanged(
            habit_id,
            {"streak_breaks_count": breaks + 1},
            {"streak_breaks_count": breaks}
        )
    except DatabaseError as e:
        logger.error(f"Failed to undo unpaid recovery break on habit {habit_id}: {e}")
        return

    if restored is None:
        logger.warning(
            f"Breaks count of habit {habit_id} changed since the failed recovery, not undoing"
        )


def recover_streak(user_id: str, habit_id: str) -> Dict[str, Any]:
    """
    Pay to recover a lapsed streak

    Recovery bumps the habit's breaks counter (doubling the next recovery's
    price) and takes the coins. It does not put the old streak value back.

    Returns:
        Dict with status, message, habit/profile data and stale views

    Raises:
        StreakNotRecoverableError: If the habit never completed or its streak is not 0
        InsufficientFundsError: If the user cannot pay
        HabitNotFoundError, NotOwnerError: If the habit is missing or not the caller's
        DatabaseError: If the habit update fails (nothing applied)
    """
    habit = get_owned_habit(user_id, habit_id)

    reason = _recovery_block_reason(habit)
    if reason:
        raise StreakNotRecoverableError(reason)

    breaks = habit.get("streak_breaks_count") or 0
    cost = wallet.habit_recovery_cost(habit)

    profile = wallet.load_profile(user_id)
    balance = profile.get("coins") or 0
    if balance < cost:
        raise InsufficientFundsError(cost, balance, "recover this streak")

    updated_habit = habit_repository.update_habit(habit_id, {"streak_breaks_count": breaks + 1})
    stale = [VIEW_HABITS, VIEW_STATS, VIEW_PROFILE]

    try:
        profile = wallet.debit_coins(user_id, cost, "recover this streak")
    except PreconditionError:
        # The balance dropped between the check and the debit
        logger.warning(f"Recovery of habit {habit_id} lost the balance race, undoing")
        _undo_recovery_break(habit_id, breaks)
        raise
    except HabitQuestException as e:
        logger.error(f"Recovery of habit {habit_id} recorded but coin debit failed: {e}")
        return {
            "status": "partial",
            "message": (
                f"Streak recovery for '{habit['title']}' was recorded, "
                f"but the {cost} coin payment failed: {e}"
            ),
            "data": {"habit": updated_habit, "profile": None, "cost": cost},
            "stale": stale
        }

    logger.info(f"User {user_id} recovered streak of habit {habit_id} for {cost} coins")

    return {
        "status": "success",
        "message": f"Streak recovered for '{habit['title']}' for {cost} coins",
        "data": {"habit": updated_habit, "profile": profile, "cost": cost},
        "stale": stale
    }


# ============================================================================
# TEAMS
# ============================================================================

def _undo_team_creation(team_id: str, user_id: str) -> None:
    try:
        team_repository.delete_membership(team_id, user_id)
        team_repository.delete_team(team_id)
    except DatabaseError as e:
        logger.error(f"Failed to remove team {team_id} after aborted creation: {e}")


def create_team(user_id: str, name: str, description: Optional[str] = None) -> Dict[str, Any]:
    """
    Create a team for a fixed fee with the caller as leader

    Either the team, the leader membership and the debit all happen, or the
    team and membership are removed again.

    Returns:
        Dict with status, message, team/membership/profile data and stale views

    Raises:
        InvalidTeamDataError: If the name is empty
        InsufficientFundsError: If the caller has fewer than TEAM_CREATION_COST coins
        DatabaseError: If a store call fails
    """
    if name is None or not name.strip():
        raise InvalidTeamDataError("Team name is required")
    name = name.strip()

    profile = wallet.load_profile(user_id)
    balance = profile.get("coins") or 0
    if balance < TEAM_CREATION_COST:
        raise InsufficientFundsError(TEAM_CREATION_COST, balance, "create a team")

    team = team_repository.create_team(name, description or None, user_id)
    try:
        membership = team_repository.create_membership(team["id"], user_id, ROLE_LEADER)
        profile = wallet.debit_coins(user_id, TEAM_CREATION_COST, "create a team")
    except HabitQuestException:
        logger.warning(f"Creation of team '{name}' failed after insert, removing it")
        _undo_team_creation(team["id"], user_id)
        raise

    logger.info(f"Team '{name}' created by user {user_id}")

    return {
        "status": "success",
        "message": f"Team '{name}' created",
        "data": {"team": team, "membership": membership, "profile": profile},
        "stale": [VIEW_TEAMS, VIEW_PROFILE]
    }


def join_team(user_id: str, team_id: str) -> Dict[str, Any]:
    """
    Join a team for a fixed fee

    Returns:
        Dict with status, message, membership/profile data and stale views

    Raises:
        TeamNotFoundError: If the team does not exist
        AlreadyTeamMemberError: If the caller already belongs to the team
        InsufficientFundsError: If the caller has fewer than TEAM_JOIN_COST coins
        DatabaseError: If a store call fails
    """
    team = team_repository.get_team_by_id(team_id)
    if team is None:
        raise TeamNotFoundError(f"Team {team_id} not found")

    if team_repository.get_membership(team_id, user_id) is not None:
        raise AlreadyTeamMemberError(f"You are already a member of '{team['name']}'")

    profile = wallet.load_profile(user_id)
    balance = profile.get("coins") or 0
    if balance < TEAM_JOIN_COST:
        raise InsufficientFundsError(TEAM_JOIN_COST, balance, "join a team")

    membership = team_repository.create_membership(team_id, user_id, ROLE_MEMBER)
    try:
        profile = wallet.debit_coins(user_id, TEAM_JOIN_COST, "join a team")
    except HabitQuestException:
        logger.warning(f"Join of team {team_id} by {user_id} failed after insert, removing membership")
        try:
            team_repository.delete_membership(team_id, user_id)
        except DatabaseError as e:
            logger.error(f"Failed to remove membership after aborted join: {e}")
        raise

    logger.info(f"User {user_id} joined team {team_id}")

    return {
        "status": "success",
        "message": f"You joined '{team['name']}'",
        "data": {"team": team, "membership": membership, "profile": profile},
        "stale": [VIEW_TEAMS, VIEW_PROFILE]
    }
