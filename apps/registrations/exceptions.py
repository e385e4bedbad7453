class RegistrationError(Exception):
    """
    Base class for failures of a registration request.

    retryable tells callers whether sending the same request again can succeed, status_code is the HTTP status the
    views report it with.
    """

    retryable = False
    status_code = 500

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class InvalidRequest(RegistrationError):
    """ Missing or malformed request fields. Raised before the database is touched. """

    status_code = 400


class NotFound(RegistrationError):
    """ The event (or member) the request refers to does not exist. """

    status_code = 404


class TransientFailure(RegistrationError):
    """
    The registration transaction was rolled back because of the database (lock wait timeout, deadlock, constraint
    violation by a concurrent request, lost connection). Nothing was changed, the request is safe to retry.
    """

    retryable = True
    status_code = 503
