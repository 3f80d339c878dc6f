from fastapi import APIRouter

from hours_tracker.api.acknowledgements import acknowledgements_router
from hours_tracker.api.admin import admin_router
from hours_tracker.api.calendar import calendar_router
from hours_tracker.api.employees import employees_router
from hours_tracker.api.hours import hours_router
from hours_tracker.api.pto_entries import employee_entries_router, entries_router
from hours_tracker.api.status import status_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(employee_entries_router)
api_router.include_router(entries_router)
api_router.include_router(status_router)
api_router.include_router(hours_router)
api_router.include_router(acknowledgements_router)
api_router.include_router(calendar_router)
api_router.include_router(admin_router)
