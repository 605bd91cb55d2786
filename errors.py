"""API error taxonomy.

Route handlers and services raise these; `create_app` turns them into JSON
responses of the form ``{"success": false, "message": ...}``.
"""


class ApiError(Exception):
    status_code = 500
    message = 'Error interno del servidor'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'success': False, 'message': self.message}


class ValidationError(ApiError):
    status_code = 400
    message = 'Datos inválidos'

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or {}

    def to_dict(self):
        payload = super().to_dict()
        if self.errors:
            payload['errors'] = self.errors
        return payload


class Unauthenticated(ApiError):
    status_code = 401
    message = 'No token provided'


class NotFound(ApiError):
    status_code = 404
    message = 'Not found'


class Conflict(ApiError):
    status_code = 409
    message = 'Conflict'


class InvalidCredentials(ApiError):
    # Same message for unknown email and wrong password.
    status_code = 401
    message = 'Invalid email or password.'


class InvalidOrExpiredToken(ApiError):
    status_code = 400
    message = 'Token inválido o expirado'


class InternalError(ApiError):
    status_code = 500
