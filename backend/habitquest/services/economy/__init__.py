"""
Economy module
Coin and XP rules: rewards, streak recovery pricing, team fees

Only the wallet is imported here; the habits service depends on it, and
economy.service depends on the habits service.
"""
from . import wallet

from .wallet import (
    recovery_cost,
    habit_recovery_cost,
    level_progress,
    completion_reward,
    debit_coins,
    credit_rewards
)

__all__ = [
    'wallet',
    'recovery_cost',
    'habit_recovery_cost',
    'level_progress',
    'completion_reward',
    'debit_coins',
    'credit_rewards'
]
