from typing import Any, Dict, List, Optional


class FamilyTasksError(Exception):
    """Base class for failures that cross the request boundary as typed errors."""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or []

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class BadRequestError(FamilyTasksError):
    code = "BAD_REQUEST"
    status_code = 400


class ValidationError(FamilyTasksError):
    code = "VALIDATION_ERROR"
    status_code = 422

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        details = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        return cls("Invalid input", details=details)


class NotFoundError(FamilyTasksError):
    code = "NOT_FOUND"
    status_code = 404


class MethodNotSupportedError(FamilyTasksError):
    code = "METHOD_NOT_SUPPORTED"
    status_code = 405


class StoreError(FamilyTasksError):
    code = "STORE_ERROR"
    status_code = 503
