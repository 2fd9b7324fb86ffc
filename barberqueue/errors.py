# barberqueue/errors.py

"""Domain errors raised by the queue, account and payment layers.

Routers never build status codes for these themselves; ``main.py`` maps every
``QueueAppError`` to ``{"msg": ...}`` with the class's ``status_code``.
"""


class QueueAppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(QueueAppError):
    status_code = 422


class NotFound(QueueAppError):
    status_code = 404


class NotInQueue(QueueAppError):
    status_code = 400

    def __init__(self, message: str = "User is not in any queue"):
        super().__init__(message)


class NotAuthorized(QueueAppError):
    status_code = 403


class AlreadyExists(QueueAppError):
    status_code = 409


class InvalidCredentials(QueueAppError):
    status_code = 401


class PaymentError(QueueAppError):
    """The payment processor could not be reached or is not configured."""

    status_code = 502


class InvalidSignature(QueueAppError):
    status_code = 400

    def __init__(self, message: str = "Invalid payment signature"):
        super().__init__(message)


class PaymentCapturedJoinFailed(QueueAppError):
    """Money has moved but the queue join did not happen; needs manual follow-up."""

    status_code = 500

    def __init__(self, message: str = "Payment captured but queue join failed"):
        super().__init__(message)
