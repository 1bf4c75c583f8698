"""
Wallet - Coin and XP arithmetic for a profile

Balance changes are conditional updates: the new value is written only if the
balance still holds the value it was computed from. A writer that loses the
race re-reads and tries again, so concurrent debits cannot overwrite each
other and a debit can never take the balance below zero.
"""
from typing import Dict, Any
import logging

from habitquest.core.config import settings
from habitquest.core.constants import COIN_UPDATE_MAX_ATTEMPTS, XP_PER_LEVEL
from habitquest.core.exceptions import ConcurrentUpdateError, InsufficientFundsError
from habitquest.services.profiles import repository as profile_repository
from habitquest.services.profiles import service as profile_service

logger = logging.getLogger(__name__)


def recovery_cost(base_cost: int, breaks: int) -> int:
    """
    Coin cost of recovering a lapsed streak

    Each recovery on the same habit doubles the next one.

    Args:
        base_cost: The habit's streak_recovery_cost
        breaks: The habit's streak_breaks_count

    Returns:
        base_cost * 2 ** breaks
    """
    return (base_cost or 0) * 2 ** (breaks or 0)


def habit_recovery_cost(habit: Dict[str, Any]) -> int:
    """Recovery cost for a stored habit row, with defaults for NULL columns"""
    base_cost = habit.get("streak_recovery_cost")
    if base_cost is None:
        base_cost = settings.DEFAULT_STREAK_RECOVERY_COST
    return recovery_cost(base_cost, habit.get("streak_breaks_count") or 0)


def level_progress(xp: int) -> float:
    """Fraction of the way through the current level, 0.0 <= p < 1.0"""
    return ((xp or 0) % XP_PER_LEVEL) / XP_PER_LEVEL


def completion_reward(habit: Dict[str, Any]) -> Dict[str, int]:
    """Coins and XP granted for one completion of a habit"""
    coins = habit.get("coin_reward")
    if coins is None:
        coins = settings.DEFAULT_COIN_REWARD
    return {"coins": coins, "xp": settings.XP_PER_COMPLETION}


def load_profile(user_id: str) -> Dict[str, Any]:
    """
    Get the profile holding a user's balance

    A user without a profile row gets an empty one (0 coins), so a first
    reward has somewhere to go and a first purchase fails on funds.

    Raises:
        DatabaseError: If a store call fails
    """
    return profile_service.ensure_profile(user_id)


def debit_coins(user_id: str, amount: int, action: str) -> Dict[str, Any]:
    """
    Take coins from a profile

    Args:
        user_id: The paying user
        amount: Coins to take
        action: Phrase used in the insufficient-funds message ("join a team")

    Returns:
        The updated profile

    Raises:
        InsufficientFundsError: If the balance does not cover the amount
        ConcurrentUpdateError: If the balance kept changing under us
        DatabaseError: If a store call fails
    """
    for attempt in range(1, COIN_UPDATE_MAX_ATTEMPTS + 1):
        profile = load_profile(user_id)
        balance = profile.get("coins") or 0
        if balance < amount:
            raise InsufficientFundsError(amount, balance, action)

        updated = profile_repository.update_profile_if_unchanged(
            user_id,
            {"coins": profile.get("coins")},
            {"coins": balance - amount}
        )
        if updated is not None:
            logger.info(f"Debited {amount} coins from {user_id} ({balance} -> {balance - amount})")
            return updated

        logger.warning(f"Balance of {user_id} changed during debit, retrying (attempt {attempt})")

    raise ConcurrentUpdateError(f"Could not debit {amount} coins: balance kept changing")


def credit_rewards(user_id: str, coins: int, xp: int) -> Dict[str, Any]:
    """
    Add coins and XP to a profile

    Returns:
        The updated profile

    Raises:
        ConcurrentUpdateError: If the profile kept changing under us
        DatabaseError: If a store call fails
    """
    for attempt in range(1, COIN_UPDATE_MAX_ATTEMPTS + 1):
        profile = load_profile(user_id)
        balance = profile.get("coins") or 0
        current_xp = profile.get("xp") or 0

        updated = profile_repository.update_profile_if_unchanged(
            user_id,
            {"coins": profile.get("coins"), "xp": profile.get("xp")},
            {"coins": balance + coins, "xp": current_xp + xp}
        )
        if updated is not None:
            logger.info(f"Credited {coins} coins and {xp} XP to {user_id}")
            return updated

        logger.warning(f"Profile of {user_id} changed during credit, retrying (attempt {attempt})")

    raise ConcurrentUpdateError(f"Could not credit {coins} coins: balance kept changing")
