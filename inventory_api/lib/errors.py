"""
Inventory errors.

Each error carries the HTTP status and the machine-readable code rendered in
the error envelope: {"status": "ERROR", "error": <code>, "message": ...}.
"""
from typing import Any, Optional


class InventoryError(Exception):
    """Base class for client-facing errors."""

    status_code = 400
    code = "ERROR"
    default_message = "The request could not be processed."

    def __init__(
        self,
        message: Optional[str] = None,
        details: Any = None,
        code: Optional[str] = None,
    ):
        self.message = message or self.default_message
        self.details = details
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {
            "status": "ERROR",
            "error": self.code,
            "message": self.message,
        }
        if self.details is not None:
            body["details"] = self.details
        return body


# --- Validation ---

class ValidationError(InventoryError):
    code = "VALIDATION_ERROR"
    default_message = "Invalid request."


# --- Not found ---

class NotFoundError(InventoryError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Resource not found."


class BuildingNotFoundError(InventoryError):
    # Reported as a bad request by apartment generation
    code = "BUILDING_NOT_FOUND"
    default_message = "Building does not exist."


class FloorPlanNotFoundError(InventoryError):
    code = "FLOOR_PLAN_NOT_FOUND"
    default_message = "Floor plan does not exist."


class NoApartmentsFoundError(InventoryError):
    status_code = 404
    code = "NO_APARTMENTS_FOUND"
    default_message = "No apartments found for this building."


# --- Conflicts ---

class DuplicateApartmentsError(InventoryError):
    code = "DUPLICATE_APARTMENTS"
    default_message = (
        "Apartments with the same building_id, name, and floor_plan_id already exist."
    )


class AmbiguousApartmentError(InventoryError):
    status_code = 409
    code = "AMBIGUOUS_APARTMENT"
    default_message = "More than one apartment matches this floor plan and flat number."


class ConflictError(InventoryError):
    status_code = 409
    code = "CONFLICT"
    default_message = "Resource already exists."
