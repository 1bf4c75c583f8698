"""
Onboarding Routes - Goals and habit templates for new users
"""
from fastapi import APIRouter, Depends
from habitquest.models.profile import OnboardingRequest
from habitquest.services import onboarding as onboarding_service
from habitquest.core.dependencies import get_current_user_id
from habitquest.core.exceptions import HabitQuestException
from .errors import to_http_exception, unexpected_error

router = APIRouter(tags=["onboarding"])


@router.get("/onboarding/templates")
async def list_templates(user_id: str = Depends(get_current_user_id)):
    """Get the habit templates a new user can start from"""
    try:
        return onboarding_service.list_templates()
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.post("/onboarding")
async def submit_onboarding(request: OnboardingRequest, user_id: str = Depends(get_current_user_id)):
    """Save the caller's goal and optionally create a habit from a template"""
    try:
        return onboarding_service.submit_onboarding(
            user_id,
            category=request.category,
            description=request.description,
            target=request.target,
            display_name=request.display_name,
            template_id=request.template_id
        )
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)


@router.get("/goals")
async def list_goals(user_id: str = Depends(get_current_user_id)):
    """Get the caller's goals; their categories are the valid habit categories"""
    try:
        return onboarding_service.list_goals(user_id)
    except HabitQuestException as e:
        raise to_http_exception(e)
    except Exception as e:
        raise unexpected_error(e)
