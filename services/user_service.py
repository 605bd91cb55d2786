from flask import current_app

from errors import Conflict, InvalidCredentials, NotFound, ValidationError
from extensions import db
from models import CredentialKind, User, normalize_email
from services import avatar_service

USER_NOT_FOUND = 'Usuario no encontrado'
NAME_MAX_LENGTH = 100  # users.first_name / users.last_name


def get_user(user_id) -> User:
    """Load a user or fail with 404."""
    user = db.session.get(User, user_id)
    if not user:
        raise NotFound(USER_NOT_FOUND)
    return user


def email_taken(email, exclude_user_id=None) -> bool:
    query = User.query.filter(User.email == normalize_email(email))
    if exclude_user_id is not None:
        query = query.filter(User.id != exclude_user_id)
    return db.session.query(query.exists()).scalar()


def create_user(email: str, password: str, first_name: str, last_name: str, **profile_data) -> User:
    """Create a new user with the given email and password."""
    if email_taken(email):
        raise Conflict('This email is already registered.')

    user = User(
        email=email,
        first_name=first_name.strip(),
        last_name=last_name.strip(),
        **{k: v for k, v in profile_data.items() if v is not None}
    )
    user.set_password(password)
    try:
        db.session.add(user)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error creating user {email}: {e}')
        raise

    current_app.logger.info(f'User {user.id} registered')
    return user


def authenticate(email: str, password: str) -> User:
    """Return the user for valid credentials.

    Unknown email, wrong password and accounts without a local password all
    raise the same InvalidCredentials.
    """
    user = User.query.filter_by(email=normalize_email(email)).first()
    if not user or not user.check_password(password):
        current_app.logger.info(f'Failed login attempt for {email}')
        raise InvalidCredentials()
    return user


def find_or_create_google_user(google_id, email, first_name=None, last_name=None) -> User:
    """Resolve a Google identity to a local user, creating one on first sight.

    Lookup is by Google id first, then by email (which links the Google id to
    the existing account). New accounts get no local password.
    """
    user = User.query.filter_by(google_id=google_id).first()
    if user:
        return user

    email = normalize_email(email)
    user = User.query.filter_by(email=email).first()
    fallback_name = email.split('@', 1)[0]
    try:
        if user:
            user.google_id = google_id
            current_app.logger.info(f'Linked Google identity to user {user.id}')
        else:
            user = User(
                email=email,
                first_name=((first_name or '').strip() or fallback_name)[:NAME_MAX_LENGTH],
                last_name=((last_name or '').strip() or fallback_name)[:NAME_MAX_LENGTH],
                google_id=google_id,
            )
            db.session.add(user)
            current_app.logger.info(f'Created user {email} from Google sign-in')
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error resolving Google user {email}: {e}')
        raise
    return user


def update_profile(user_id, first_name, last_name, age, email) -> User:
    user = get_user(user_id)
    if email_taken(email, exclude_user_id=user.id):
        raise Conflict('Este correo electrónico ya está registrado')

    try:
        user.first_name = first_name.strip()
        user.last_name = last_name.strip()
        user.age = age
        user.email = normalize_email(email)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error updating profile for user {user_id}: {e}')
        raise

    current_app.logger.info(f'Profile updated for user {user.id}')
    return user


def change_password(user_id, current_password, new_password) -> User:
    user = get_user(user_id)
    if CredentialKind.PASSWORD not in user.credential_kinds or not user.check_password(current_password):
        raise ValidationError('La contraseña actual es incorrecta')

    try:
        user.set_password(new_password)
        # An outstanding reset link must not outlive a deliberate change.
        user.reset_ticket = None
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error changing password for user {user_id}: {e}')
        raise

    current_app.logger.info(f'Password changed for user {user.id}')
    return user


def delete_user(user_id):
    """Hard delete a user, their tasks and their avatar file."""
    user = get_user(user_id)
    avatar = user.avatar
    try:
        db.session.delete(user)
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f'Error deleting user {user_id}: {e}')
        raise

    avatar_service.remove_avatar_file(avatar)
    current_app.logger.info(f'Account deleted for user {user_id}')
