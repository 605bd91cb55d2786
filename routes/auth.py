import json
from urllib.parse import quote

from flask import Blueprint, current_app, jsonify, redirect, request, session, url_for
from sqlalchemy.exc import SQLAlchemyError

from routes.decorators import current_identity, token_required, validate_json
from schemas import LoginRequest, RecoverPasswordRequest, ResetPasswordRequest, SignupRequest
from services import google_oauth_service, user_service
from services.password_reset_service import PasswordResetService
from services.token_service import issue_token

auth_bp = Blueprint('auth', __name__)

RECOVERY_MESSAGE = 'Si existe una cuenta con este email, recibirás un correo con las instrucciones.'
GOOGLE_ERROR_MESSAGE = 'Error during authentication process'
GOOGLE_STATE_KEY = 'google_oauth_state'


def _auth_response(user, message, status=200, **extra):
    body = {
        'success': True,
        'message': message,
        **extra,
        'token': issue_token(user.id, user.email),
        'user': user.to_public_dict(),
    }
    return jsonify(body), status


@auth_bp.route('/signup', methods=['POST'])
@validate_json(SignupRequest)
def signup(payload):
    user = user_service.create_user(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        age=payload.age,
    )
    return _auth_response(user, 'User created successfully', 201, userId=user.id)


@auth_bp.route('/login', methods=['POST'])
@validate_json(LoginRequest)
def login(payload):
    user = user_service.authenticate(payload.email, payload.password)
    current_app.logger.info(f'User {user.id} logged in successfully')
    return _auth_response(user, 'Login successful')


@auth_bp.route('/logout', methods=['POST'])
@token_required
def logout():
    identity = current_identity()
    # Tokens are stateless; only the Google login session cookie is server-issued.
    session.clear()
    current_app.logger.info(f'User {identity.user_id} logged out')
    return jsonify({'success': True, 'message': 'Logout successful'})


@auth_bp.route('/recover-password', methods=['POST'])
@validate_json(RecoverPasswordRequest)
def recover_password(payload):
    PasswordResetService().request_reset(payload.email)
    # Always the same answer, whether or not the account exists
    return jsonify({'success': True, 'message': RECOVERY_MESSAGE})


@auth_bp.route('/reset-password', methods=['POST'])
@validate_json(ResetPasswordRequest)
def reset_password(payload):
    user = PasswordResetService().reset_password(payload.token, payload.password)
    return _auth_response(user, 'Contraseña actualizada exitosamente')


def _frontend_login_error():
    frontend_url = current_app.config['FRONTEND_URL']
    return redirect(f'{frontend_url}/login?error={quote(GOOGLE_ERROR_MESSAGE)}')


@auth_bp.route('/google', methods=['GET'])
def google_login():
    if not google_oauth_service.is_configured():
        current_app.logger.error('Google sign-in requested but GOOGLE_CLIENT_ID/SECRET are not set')
        return _frontend_login_error()

    state = google_oauth_service.new_state()
    session[GOOGLE_STATE_KEY] = state
    redirect_uri = url_for('auth.google_callback', _external=True)
    return redirect(google_oauth_service.authorization_url(redirect_uri, state))


@auth_bp.route('/google/callback', methods=['GET'])
def google_callback():
    expected_state = session.pop(GOOGLE_STATE_KEY, None)
    code = request.args.get('code')

    if not google_oauth_service.is_configured() or not code \
            or not expected_state or request.args.get('state') != expected_state:
        current_app.logger.warning('Google callback rejected: missing code or state mismatch')
        return _frontend_login_error()

    try:
        profile = google_oauth_service.fetch_profile(code, url_for('auth.google_callback', _external=True))
        user = user_service.find_or_create_google_user(**profile)
    except google_oauth_service.GoogleAuthError as e:
        current_app.logger.error(f'Google auth error: {e}')
        return _frontend_login_error()
    except SQLAlchemyError as e:
        # user_service has already rolled back
        current_app.logger.error(f'Could not store Google user: {e}')
        return _frontend_login_error()

    user_data = {
        'success': True,
        'message': 'Login successful',
        'token': issue_token(user.id, user.email),
        'user': user.to_public_dict(),
    }
    callback_url = f"{current_app.config['FRONTEND_URL']}/google-callback.html"
    return redirect(f'{callback_url}?data={quote(json.dumps(user_data))}')
