from fastapi import APIRouter

from hr_leave.api.balances import admin_accrual_router, leave_balance_router
from hr_leave.api.employees import admin_employees_router, employees_router
from hr_leave.api.notifications import admin_notifications_router, notifications_router
from hr_leave.api.pay import admin_pay_router, pay_router
from hr_leave.api.reports import reports_router
from hr_leave.api.requests import requests_router

api_router = APIRouter(prefix="/api")
api_router.include_router(employees_router)
api_router.include_router(admin_employees_router)
api_router.include_router(leave_balance_router)
api_router.include_router(admin_accrual_router)
api_router.include_router(requests_router)
api_router.include_router(notifications_router)
api_router.include_router(admin_notifications_router)
api_router.include_router(pay_router)
api_router.include_router(admin_pay_router)
api_router.include_router(reports_router)
