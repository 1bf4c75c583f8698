"""
Onboarding module
"""
from .service import list_templates, list_goals, submit_onboarding

__all__ = ['list_templates', 'list_goals', 'submit_onboarding']
