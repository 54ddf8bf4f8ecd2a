"""
Domain errors raised by the services.

The API layer maps them onto HTTP responses:
ValidationError -> 400, NotFoundError -> 404, CalculationError -> 500.
"""
from datetime import date
from typing import Optional


class FitUError(Exception):
    """Base class for all service-level errors."""


class ValidationError(FitUError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class NotFoundError(FitUError):
    def __init__(self, resource: str, identifier):
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class CalculationError(FitUError):
    def __init__(self, message: str, user_id: Optional[str] = None, day: Optional[date] = None):
        super().__init__(message)
        self.user_id = user_id
        self.day = day
