"""
Sessions module
In-memory timed habit sessions
"""
from .manager import CompletionSession, SessionManager, session_job_id

__all__ = ['CompletionSession', 'SessionManager', 'session_job_id']
