class MedicineAPIError(Exception):
    """Base error for the medicine API. Carries the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(MedicineAPIError):
    """A required parameter is missing or the request body is malformed."""

    status_code = 400


class NotFoundError(MedicineAPIError):
    """The query ran but matched nothing."""

    status_code = 404


class StoreError(MedicineAPIError):
    """The document store could not be reached or rejected the operation."""

    status_code = 500
