"""
Router package for the Summit API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- calculator: Stateless elevation and energy estimate endpoints
- profile: User profile and preferences
- workouts: Workout ledger (log, edit, delete)
- challenges: Templates, active instances and contributions
- achievements: Badges and trophies
- progress: Lifetime and weekly progress summary
"""

from api.routers.health import router as health_router
from api.routers.calculator import router as calculator_router
from api.routers.profile import router as profile_router
from api.routers.workouts import router as workouts_router
from api.routers.challenges import router as challenges_router
from api.routers.achievements import router as achievements_router
from api.routers.progress import router as progress_router

__all__ = [
    "health_router",
    "calculator_router",
    "profile_router",
    "workouts_router",
    "challenges_router",
    "achievements_router",
    "progress_router",
]
