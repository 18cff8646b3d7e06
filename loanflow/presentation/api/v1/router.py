from fastapi import APIRouter

from .admin import admin_router
from .applications import applications_router
from .auth import auth_router
from .dashboards import dashboards_router
from .documents import documents_router
from .health import health_router
from .interest_rates import interest_rates_router
from .loans import loans_router
from .workflow import workflow_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(auth_router, tags=["Auth"])
router.include_router(applications_router, tags=["Applications"])
router.include_router(workflow_router, tags=["Workflow"])
router.include_router(documents_router, tags=["Documents"])
router.include_router(loans_router, tags=["Loans"])
router.include_router(interest_rates_router, tags=["Interest Rates"])
router.include_router(admin_router, tags=["Admin"])
router.include_router(dashboards_router, tags=["Dashboards"])
