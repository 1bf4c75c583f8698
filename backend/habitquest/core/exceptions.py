"""
Custom Exceptions - Application-specific error types
"""


class HabitQuestException(Exception):
    """Base exception for all HabitQuest errors"""
    pass


# ============================================================================
# VALIDATION
# ============================================================================

class InvalidHabitDataError(HabitQuestException):
    """Raised when habit data validation fails"""
    pass


class InvalidTeamDataError(HabitQuestException):
    """Raised when team data validation fails"""
    pass


class InvalidProfileDataError(HabitQuestException):
    """Raised when profile or onboarding data validation fails"""
    pass


# ============================================================================
# AUTHORIZATION
# ============================================================================

class NotAuthenticatedError(HabitQuestException):
    """Raised when the caller has no valid session with the identity provider"""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class NotOwnerError(HabitQuestException):
    """Raised when the caller does not own the record being mutated"""
    pass


# ============================================================================
# NOT FOUND
# ============================================================================

class HabitNotFoundError(HabitQuestException):
    """Raised when a habit cannot be found"""
    pass


class TeamNotFoundError(HabitQuestException):
    """Raised when a team cannot be found"""
    pass


class TemplateNotFoundError(HabitQuestException):
    """Raised when a habit template cannot be found"""
    pass


# ============================================================================
# PRECONDITIONS
# ============================================================================

class PreconditionError(HabitQuestException):
    """Raised when an operation is valid but cannot run in the current state"""
    pass


class InsufficientFundsError(PreconditionError):
    """Raised when the coin balance does not cover a cost"""

    def __init__(self, required: int, available: int, action: str = "do this"):
        self.required = required
        self.available = available
        self.shortfall = required - available
        super().__init__(
            f"You need {required} coins to {action} but only have {available} "
            f"({self.shortfall} short)"
        )


class SessionAlreadyActiveError(PreconditionError):
    """Raised when a user starts a session while another one is running"""
    pass


class NoActiveSessionError(PreconditionError):
    """Raised when a session operation needs an active session and there is none"""
    pass


class StreakNotRecoverableError(PreconditionError):
    """Raised when a streak recovery is attempted on a habit that is not lapsed"""
    pass


class AlreadyTeamMemberError(PreconditionError):
    """Raised when joining a team the user already belongs to"""
    pass


# ============================================================================
# STORE / TRANSPORT
# ============================================================================

class DatabaseError(HabitQuestException):
    """Raised when database operations fail"""
    pass


class ConcurrentUpdateError(DatabaseError):
    """Raised when a conditional update keeps losing to concurrent writers"""
    pass
