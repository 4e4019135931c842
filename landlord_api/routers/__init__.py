"""
API route handlers for the Landlord API.
"""

from .auth import router as auth_router
from .properties import router as properties_router
from .appliances import router as appliances_router
from .maintenance import router as maintenance_router
from .issues import router as issues_router
from .rent_payments import router as rent_payments_router
from .reports import router as reports_router
from .health import router as health_router

__all__ = [
    "auth_router",
    "properties_router",
    "appliances_router",
    "maintenance_router",
    "issues_router",
    "rent_payments_router",
    "reports_router",
    "health_router",
]
