class ApiError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None, details=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.details = details

    def to_dict(self):
        data = {"error": self.message}
        if self.details is not None:
            data["details"] = self.details
        return data


class Unauthenticated(ApiError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentials(ApiError):
    status_code = 401
    message = "Invalid credentials"


class Forbidden(ApiError):
    status_code = 403
    message = "Forbidden"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class Conflict(ApiError):
    status_code = 409
    message = "Conflict"


class ValidationError(ApiError):
    status_code = 400
    message = "Validation error"

    @classmethod
    def from_pydantic(cls, exc):
        """Collapse a pydantic ValidationError into {field: [messages]}."""
        details = {}
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"]) or "__root__"
            details.setdefault(field, []).append(err["msg"])
        return cls(details=details)


class UpstreamError(ApiError):
    status_code = 500
    message = "Upstream service failure"
