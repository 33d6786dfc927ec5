"""
Exception handlers - map domain errors to HTTP responses.
Challenge: Consistent error bodies; routers never translate errors by hand.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from vehicle_reports.core.exceptions import ConflictError, NotFoundError


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": exc.message})


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
