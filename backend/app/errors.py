"""
Typed errors raised by services and routes. Each carries the HTTP status and a static
public message; app.main registers handlers that render them as {"message": ...}.
Internal detail goes to the log, never to the client.
"""


class WiselyError(Exception):
    status_code = 500
    public_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.public_message
        super().__init__(self.message)


class ValidationError(WiselyError):
    """Missing or malformed request fields."""
    status_code = 400
    public_message = "Invalid request"


class AuthError(WiselyError):
    """Missing, invalid or expired session, or identity verification failure."""
    status_code = 401
    public_message = "Unauthorized"


class NotFoundError(WiselyError):
    status_code = 404
    public_message = "Not found"


class UpstreamError(WiselyError):
    """Identity oracle or text oracle failed."""
    status_code = 500
    public_message = "Upstream service failed"


class GenerationError(UpstreamError):
    """Text oracle returned nothing usable for a question set."""
    public_message = "Failed to generate test"


class PersistenceError(WiselyError):
    status_code = 500
    public_message = "Database operation failed"
