"""
Report endpoints - CRUD, approval, filters and price statistics.
Challenge: Static paths (approved, by-year-range, ...) declared before /{report_id}.
Design: Thin controller; service layer holds business logic.
"""

from fastapi import APIRouter, HTTPException, Query, status

from vehicle_reports.core.dependencies import ReportServiceDep
from vehicle_reports.schemas.report import (
    AveragePriceResponse,
    ReportCreate,
    ReportResponse,
    ReportUpdate,
    ReportWithOwnerResponse,
)

router = APIRouter()


@router.post("", response_model=ReportWithOwnerResponse, status_code=status.HTTP_201_CREATED)
async def create_report(svc: ReportServiceDep, data: ReportCreate, user_id: str = Query(...)):
    """Create report owned by user_id. 404 if the user does not exist."""
    return await svc.create(data, user_id)


@router.get("", response_model=list[ReportWithOwnerResponse])
async def list_reports(svc: ReportServiceDep):
    return await svc.find_all()


@router.get("/approved", response_model=list[ReportWithOwnerResponse])
async def list_approved(svc: ReportServiceDep):
    return await svc.find_approved()


@router.get("/by-user/{user_id}", response_model=list[ReportResponse])
async def list_by_user(svc: ReportServiceDep, user_id: str):
    return await svc.find_by_user(user_id)


@router.get("/by-make-model", response_model=list[ReportWithOwnerResponse])
async def list_by_make_and_model(
    svc: ReportServiceDep,
    make: str = Query(..., min_length=1),
    model: str = Query(..., min_length=1),
):
    """Approved reports for an exact make and model."""
    return await svc.find_by_make_and_model(make, model)


@router.get("/by-year-range", response_model=list[ReportWithOwnerResponse])
async def list_by_year_range(
    svc: ReportServiceDep,
    min_year: int = Query(..., ge=1900),
    max_year: int = Query(..., ge=1900),
):
    """Approved reports with min_year <= year <= max_year, latest year first."""
    if min_year > max_year:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="min_year must not exceed max_year",
        )
    return await svc.find_by_year_range(min_year, max_year)


@router.get("/average-price", response_model=AveragePriceResponse)
async def average_price(
    svc: ReportServiceDep,
    make: str = Query(..., min_length=1),
    model: str = Query(..., min_length=1),
    year: int | None = Query(None, ge=1900),
):
    """Mean price of approved reports; 0 when there are none."""
    value = await svc.get_average_price(make, model, year)
    return AveragePriceResponse(make=make, model=model, year=year, average_price=value)


@router.get("/{report_id}", response_model=ReportWithOwnerResponse)
async def get_report(svc: ReportServiceDep, report_id: str):
    return await svc.find_one(report_id)


@router.patch("/{report_id}", response_model=ReportWithOwnerResponse)
async def update_report(svc: ReportServiceDep, report_id: str, data: ReportUpdate):
    return await svc.update(report_id, data)


@router.patch("/{report_id}/approve", response_model=ReportWithOwnerResponse)
async def approve_report(svc: ReportServiceDep, report_id: str):
    return await svc.approve_report(report_id)


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_report(svc: ReportServiceDep, report_id: str):
    await svc.remove(report_id)
