"""
API route modules.
"""

from .articles import router as articles_router
from .feeds import router as feeds_router
from .misc import router as misc_router
from .reports import router as reports_router
from .settings import router as settings_router
from .workspace import router as workspace_router

__all__ = [
    "articles_router",
    "feeds_router",
    "misc_router",
    "reports_router",
    "settings_router",
    "workspace_router",
]
