"""Error kinds surfaced to API callers.

Every error carries a stable ``kind`` string, the HTTP status it maps to and
a human-readable message. Route handlers raise these; the application's
error handlers serialise them as ``{"error": message, "kind": kind}``.
"""


class ApiError(Exception):
    kind = "InternalFailure"
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.message, "kind": self.kind}


class Unauthenticated(ApiError):
    kind = "Unauthenticated"
    status_code = 401
    default_message = "Authentication token missing"


class Forbidden(ApiError):
    kind = "Forbidden"
    status_code = 403
    default_message = "Forbidden"


class NotFound(ApiError):
    kind = "NotFound"
    status_code = 404
    default_message = "Not found"


class QuizNotStarted(ApiError):
    kind = "QuizNotStarted"
    status_code = 403
    default_message = "Forbidden - Quiz has not started"


class QuizEnded(ApiError):
    kind = "QuizEnded"
    status_code = 403
    default_message = "Forbidden - Quiz has already passed"


class AlreadySubmitted(ApiError):
    kind = "AlreadySubmitted"
    status_code = 409
    default_message = "Student has already taken the Quiz"


class MalformedResponse(ApiError):
    kind = "MalformedResponse"
    status_code = 400
    default_message = "Invalid format for response"


class ValidationFailed(ApiError):
    kind = "ValidationFailed"
    status_code = 400
    default_message = "Invalid request"


class Conflict(ApiError):
    kind = "Conflict"
    status_code = 409
    default_message = "Resource already exists"


class InternalFailure(ApiError):
    pass
