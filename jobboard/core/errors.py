"""
Error taxonomy.

- PayloadValidationError: field-level, raised before any write
- AuthenticationError / ForbiddenError: missing credentials, role mismatch or missing approval
- NotFoundError: target entity absent
- ConflictError: uniqueness violations (duplicate application, taken username)
- TransportError: the HTTP collaborator failed (client side only)

None of these are recovered locally; routes let them propagate and the
handlers in main.py turn them into JSON responses.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from jobboard.core.validation import FieldError


class JobBoardError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class PayloadValidationError(JobBoardError):
    status_code = 400

    def __init__(self, errors: List["FieldError"]):
        self.errors = list(errors)
        message = self.errors[0].message if self.errors else "Invalid payload"
        super().__init__(message)

    def fields(self) -> List[str]:
        return [error.field for error in self.errors]

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "errors": [error.model_dump() for error in self.errors],
        }


class AuthenticationError(JobBoardError):
    status_code = 401


class ForbiddenError(JobBoardError):
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFoundError(JobBoardError):
    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[int] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ConflictError(JobBoardError):
    status_code = 400


class TransportError(JobBoardError):
    status_code = 502

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.upstream_status = status_code
