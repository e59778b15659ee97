"""
techaudit/errors.py: error kinds raised by the proxy and its route guards.
Each one carries the HTTP status and the JSON envelope it is answered with.
"""
from typing import Optional


class TechAuditError(Exception):
    status_code = 500
    error = "Internal error"

    def __init__(self, error: Optional[str] = None, detail: Optional[str] = None):
        if error:
            self.error = error
        self.detail = detail
        super().__init__(self.error if detail is None else f"{self.error}: {detail}")

    def envelope(self) -> dict:
        body = {"error": self.error}
        if self.detail:
            body["detail"] = self.detail
        return body


class MissingInput(TechAuditError):
    status_code = 400
    error = "Missing url parameter"


class InvalidInput(TechAuditError):
    status_code = 400
    error = "Invalid strategy parameter"


class ServerMisconfigured(TechAuditError):
    status_code = 500

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"Server misconfigured: missing {variable}")


class Unauthorized(TechAuditError):
    status_code = 403
    error = "Forbidden"


class UpstreamFailure(TechAuditError):
    status_code = 500
    error = "Internal error while calling PageSpeed API"
