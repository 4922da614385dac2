"""
Error kinds raised by the service layer.

Routers never catch these; the handlers registered in ``main.py`` turn them
into the JSON error envelope with the matching HTTP status.
"""


class AllowanceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AllowanceError):
    """Bad or duplicate input: short description, unknown status, missing member."""
    status_code = 400


class NotFoundError(AllowanceError):
    status_code = 404


class ConflictError(AllowanceError):
    """The member already has a list in a status that must stay unique."""
    status_code = 409


class PersistenceError(AllowanceError):
    status_code = 500


class IntegrityViolation(PersistenceError):
    # unique / not-null constraint hit on commit
    pass
