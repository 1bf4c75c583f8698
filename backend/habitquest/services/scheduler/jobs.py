"""
Scheduler Job Definitions
Periodic maintenance jobs
"""
import logging

from habitquest.services.habits.streaks import check_lapsed_streaks

logger = logging.getLogger(__name__)


def sweep_lapsed_streaks() -> int:
    """
    Reset streaks of habits that went past their frequency window
    Called once daily by the scheduler

    Returns:
        Number of streaks reset (0 if the sweep failed)
    """
    try:
        return check_lapsed_streaks()
    except Exception as e:
        logger.error(f"[STREAK SWEEP] Error in sweep_lapsed_streaks: {e}", exc_info=True)
        return 0
