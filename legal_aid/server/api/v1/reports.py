"""
Report Endpoints.

Aggregates for the admin dashboard. Read-only.
"""

from typing import List

from fastapi import APIRouter

from legal_aid.core.models.io import ApiResponse, ok
from legal_aid.core.models.io.reports import CoordinatorWorkload, DashboardStats, LawyerWorkload
from legal_aid.server.services.deps import AdminDep, ReportServiceDep

router = APIRouter()


@router.get(
    "/dashboard",
    response_model=ApiResponse[DashboardStats],
    summary="Dashboard Statistics",
    description="User and case counts, cases per status and the most recent case activity.",
)
async def dashboard(admin: AdminDep, reports: ReportServiceDep):
    return ok(await reports.dashboard())


@router.get("/lawyers/workload", response_model=ApiResponse[List[LawyerWorkload]], summary="Lawyer Workload")
async def lawyer_workload(admin: AdminDep, reports: ReportServiceDep):
    return ok(await reports.lawyer_workload())


@router.get(
    "/coordinators/workload",
    response_model=ApiResponse[List[CoordinatorWorkload]],
    summary="Coordinator Workload",
)
async def coordinator_workload(admin: AdminDep, reports: ReportServiceDep):
    return ok(await reports.coordinator_workload())
