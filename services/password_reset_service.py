"""Password Reset Service.
Handles the forgot-password flow without revealing which emails are registered.
"""
from flask import current_app

from errors import InvalidOrExpiredToken
from extensions import db
from models import ResetTicket, User, normalize_email
from services import email_service
from utils.dates import utcnow


class PasswordResetService:

    def request_reset(self, email):
        """Issue a reset ticket for the account behind `email`, if any.

        Returns nothing either way; the caller must answer identically
        whether or not the account exists.
        """
        email = normalize_email(email)
        user = User.query.filter_by(email=email).first()

        if not user:
            current_app.logger.info(f'Password reset requested for unknown email {email}')
            return

        raw_token, ticket = ResetTicket.issue(current_app.config['PASSWORD_RESET_EXPIRES'])
        try:
            # A newer ticket replaces any pending one.
            user.reset_ticket = ticket
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f'Error storing reset ticket for user {user.id}: {e}')
            raise

        current_app.logger.info(f'Password reset ticket created for user {user.id}')
        self._deliver(email, raw_token)

    def _deliver(self, email, raw_token):
        try:
            sent = email_service.send_password_reset_email(email, raw_token)
        except Exception as e:
            current_app.logger.error(f'Email service error for {email}: {e}')
            return
        if not sent:
            current_app.logger.error(f'Failed to send password reset email to {email}')

    def find_user_by_token(self, raw_token):
        """Return the user holding an unexpired ticket for `raw_token`, or None."""
        token_hash = ResetTicket.hash_token(raw_token)
        return User.query.filter(
            User.reset_token_hash == token_hash,
            User.reset_expires_at > utcnow()
        ).first()

    def reset_password(self, raw_token, new_password):
        """Exchange a valid reset token for a new password.

        Raises:
            InvalidOrExpiredToken: If no unexpired ticket matches the token
        """
        user = self.find_user_by_token(raw_token)
        if not user:
            raise InvalidOrExpiredToken()

        try:
            user.set_password(new_password)
            user.reset_ticket = None
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            current_app.logger.error(f'Error resetting password for user {user.id}: {e}')
            raise

        current_app.logger.info(f'Password reset completed for user {user.id}')
        return user
