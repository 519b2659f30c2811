class ForumError(Exception):
    """Base class for errors the presentation layer turns into responses."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ForumError):
    status_code = 400


class ConflictError(ForumError):
    status_code = 409


class NotFoundError(ForumError):
    status_code = 404


class ForbiddenError(ForumError):
    status_code = 403


class OwnerMustTransferError(ForumError):
    # No ownership transfer exists yet, so an owner can never leave.
    status_code = 400


class InternalError(ForumError):
    """Storage fault. Always raised after the open unit of work was rolled back."""
    status_code = 500
