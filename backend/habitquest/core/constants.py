"""
Fixed game constants
"""

# Team economy
TEAM_CREATION_COST = 1000
TEAM_JOIN_COST = 500

# Levels
XP_PER_LEVEL = 1000

# Habits
DEFAULT_DURATION_MINUTES = 30
DEFAULT_PRIORITY = 1
MIN_PRIORITY = 1
MAX_PRIORITY = 5
FREQUENCIES = ("daily", "weekly", "monthly")

# Days a habit may go without a completion before its streak lapses
FREQUENCY_WINDOW_DAYS = {
    "daily": 1,
    "weekly": 7,
    "monthly": 31,
}

# Sessions
SESSION_TICK_SECONDS = 1
SESSION_JOB_PREFIX = "session:"

# Conditional coin updates
COIN_UPDATE_MAX_ATTEMPTS = 3

# Team roles
ROLE_LEADER = "leader"
ROLE_MEMBER = "member"

# Read views a mutation can make stale
VIEW_PROFILE = "profile"
VIEW_HABITS = "habits"
VIEW_STATS = "stats"
VIEW_TEAMS = "teams"
VIEW_GOALS = "goals"
VIEW_LEADERBOARD = "leaderboard"
