"""Route decorators: bearer-token authorization and request body validation."""
from functools import wraps

from flask import current_app, g, request
from pydantic import ValidationError as SchemaError

from errors import Unauthenticated, ValidationError
from services.token_service import InvalidToken, verify_token


def _bearer_token():
    auth_header = request.headers.get('Authorization')
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != 'bearer':
        return None
    return parts[1]


def token_required(f):
    """Require a valid bearer token and expose its identity as `g.identity`.

    Missing or malformed headers and bad tokens all fail with 401. Nothing is
    cached: every request verifies its token from scratch.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        token = _bearer_token()
        if not token:
            raise Unauthenticated('No token provided')
        try:
            g.identity = verify_token(token)
        except InvalidToken:
            current_app.logger.info(f'Rejected invalid token on {request.method} {request.path}')
            raise Unauthenticated('Invalid token')
        return f(*args, **kwargs)
    return decorated_function


def current_identity():
    """Identity attached by `token_required` for the current request."""
    identity = g.get('identity')
    if identity is None:
        raise Unauthenticated('No token provided')
    return identity


def _field_errors(exc):
    errors = {}
    for error in exc.errors():
        field = '.'.join(str(part) for part in error['loc']) or 'body'
        if error['type'] == 'value_error':
            message = str(error['ctx']['error'])
        else:
            message = error['msg']
        errors.setdefault(field, message)
    return errors


def validate_json(schema):
    """Validate the JSON body against `schema` and pass it as `payload`."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                raise ValidationError('El cuerpo de la solicitud debe ser un objeto JSON')
            try:
                payload = schema.model_validate(data)
            except SchemaError as e:
                errors = _field_errors(e)
                raise ValidationError(next(iter(errors.values())), errors=errors)
            return f(*args, payload=payload, **kwargs)
        return decorated_function
    return decorator
