"""Email Service.
Sends transactional email through Flask-Mail. Without mail credentials the
message is only logged, so development setups keep working.
"""
from urllib.parse import urlencode

from flask import current_app, render_template
from flask_mail import Message

from extensions import mail


def mail_is_configured():
    return bool(current_app.config.get('MAIL_USERNAME') and current_app.config.get('MAIL_PASSWORD'))


def build_reset_url(raw_token):
    return f"{current_app.config['FRONTEND_URL']}/reset?{urlencode({'token': raw_token})}"


def send_password_reset_email(email, raw_token):
    """Send the password reset link. Returns True when sent (or simulated)."""
    reset_url = build_reset_url(raw_token)

    if not mail_is_configured():
        current_app.logger.warning(
            f'Email not configured, simulating password reset email to {email}: {reset_url}')
        return True

    try:
        msg = Message(
            'Recuperación de Contraseña - TidyTasks',
            sender=current_app.config['MAIL_DEFAULT_SENDER'],
            recipients=[email]
        )
        msg.html = render_template('emails/password_reset.html', reset_url=reset_url)
        msg.body = render_template('emails/password_reset.txt', reset_url=reset_url)
        mail.send(msg)
        current_app.logger.info(f'Password reset email sent to {email}')
        return True
    except Exception as e:
        current_app.logger.error(f'Failed to send password reset email to {email}: {e}')
        return False
