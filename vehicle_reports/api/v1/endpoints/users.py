"""
User endpoints - CRUD and aggregate listings (RESTful API).
Design: Thin controller; UserService holds the rules, exception handlers map failures to 404/409.
"""

from fastapi import APIRouter, status

from vehicle_reports.core.dependencies import UserServiceDep
from vehicle_reports.schemas.user import (
    UserCreate,
    UserReportCountResponse,
    UserResponse,
    UserUpdate,
    UserWithReportsResponse,
)

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(svc: UserServiceDep, data: UserCreate):
    """Create new user. 409 if an active user already has this email."""
    return await svc.create_user(data)


@router.get("", response_model=list[UserWithReportsResponse])
async def list_users(svc: UserServiceDep):
    return await svc.find_all()


@router.get("/report-counts", response_model=list[UserReportCountResponse])
async def users_with_report_counts(svc: UserServiceDep):
    """Active users with the number of their active reports."""
    return await svc.get_users_with_reports_count()


@router.get("/by-domain/{domain}", response_model=list[UserResponse])
async def users_by_email_domain(svc: UserServiceDep, domain: str):
    return await svc.get_users_by_email_domain(domain)


@router.get("/by-email/{email}", response_model=UserResponse)
async def get_user_by_email(svc: UserServiceDep, email: str):
    return await svc.find_by_email(email)


@router.get("/{user_id}", response_model=UserWithReportsResponse)
async def get_user(svc: UserServiceDep, user_id: str):
    return await svc.find_one(user_id)


@router.patch("/{user_id}", response_model=UserWithReportsResponse)
async def update_user(svc: UserServiceDep, user_id: str, data: UserUpdate):
    """Partial update; fields not sent are left untouched."""
    return await svc.update(user_id, data)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(svc: UserServiceDep, user_id: str):
    """Soft delete. Reports owned by the user are kept."""
    await svc.remove(user_id)
