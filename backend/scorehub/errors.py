"""Error taxonomy raised by the account service.

Each error carries the message shown to the client and the HTTP status the
app factory's error handler answers with.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = 'Server error'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(ServiceError):
    status_code = 400
    default_message = 'Bad request'


class Unauthorized(ServiceError):
    status_code = 401
    default_message = 'Invalid credentials'


class NotFound(ServiceError):
    status_code = 404
    default_message = 'User not found'


class Conflict(ServiceError):
    # /register reports collisions as a plain 400
    status_code = 400
    default_message = 'User already exists'


class InternalError(ServiceError):
    status_code = 500
    default_message = 'Server error'
