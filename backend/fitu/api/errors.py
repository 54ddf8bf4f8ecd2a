import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fitu.exceptions import CalculationError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI):
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": exc.message, "field": exc.field},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc), "field": None},
        )

    @app.exception_handler(CalculationError)
    async def calculation_error_handler(request: Request, exc: CalculationError):
        logger.error(f"Calculation failed for user={exc.user_id} date={exc.day} on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Calculation failed. Please try again later.", "field": None},
        )
