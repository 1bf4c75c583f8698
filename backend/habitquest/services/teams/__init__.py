"""
Teams module
Team listing; paid team actions live in the economy service
"""
from . import repository
from . import service

from .service import list_teams, get_team_detail

__all__ = ['repository', 'service', 'list_teams', 'get_team_detail']
