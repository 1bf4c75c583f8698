"""
Application configuration and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables"""

    # Database
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "supabase")

    # Time zone used for "today" when the caller does not send one
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "UTC")

    # Economy
    XP_PER_COMPLETION: int = int(os.getenv("XP_PER_COMPLETION", "10"))
    DEFAULT_COIN_REWARD: int = int(os.getenv("DEFAULT_COIN_REWARD", "10"))
    DEFAULT_STREAK_RECOVERY_COST: int = int(os.getenv("DEFAULT_STREAK_RECOVERY_COST", "50"))

    # Scheduler
    STREAK_SWEEP_HOUR: int = int(os.getenv("STREAK_SWEEP_HOUR", "0"))


# Create a global settings instance
settings = Settings()
