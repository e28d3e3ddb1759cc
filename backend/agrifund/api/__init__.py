# backend/agrifund/api/__init__.py
from .projects import router as projects_router
from .investments import router as investments_router
from .users import router as users_router
from .investors import router as investors_router
from .contact import router as contact_router
from .admin import router as admin_router

__all__ = [
    "projects_router", "investments_router", "users_router",
    "investors_router", "contact_router", "admin_router"
]
