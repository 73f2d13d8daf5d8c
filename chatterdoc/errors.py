# Chatter Doc Errors
# Error categories surfaced to callers of every function


class ChatterDocError(Exception):
    """Base error carrying the HTTP status and a public error code.

    The message is shown to end users, so it must never contain
    internal diagnostics.
    """
    status = 500
    code = 'INTERNAL_ERROR'

    def __init__(self, message, status=None, code=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        if code is not None:
            self.code = code

    def to_dict(self):
        return {'error': self.message, 'code': self.code}


class InvalidInput(ChatterDocError):
    status = 400
    code = 'INVALID_INPUT'


class Unauthorized(ChatterDocError):
    status = 401
    code = 'UNAUTHORIZED'


class InsufficientCredits(ChatterDocError):
    """Balance was zero when the credit gate ran. Caller should top up."""
    status = 402
    code = 'INSUFFICIENT_CREDITS'

    def __init__(self, message='Insufficient credits'):
        super().__init__(message)


class Forbidden(ChatterDocError):
    status = 403
    code = 'FORBIDDEN'


class NotFound(ChatterDocError):
    status = 404
    code = 'NOT_FOUND'


class AlreadyAnalyzed(ChatterDocError):
    status = 409
    code = 'ALREADY_ANALYZED'


class ConfigurationError(ChatterDocError):
    status = 500
    code = 'CONFIGURATION_ERROR'


class UpstreamUnavailable(ChatterDocError):
    """The hosted database could not be reached or answered with a 5xx."""
    status = 503
    code = 'UPSTREAM_UNAVAILABLE'

    def __init__(self, message='Service temporarily unavailable, please try again'):
        super().__init__(message)
