"""User model definition.
This module defines the User ORM model and its credential helpers.
"""
import enum
import uuid

from extensions import db, bcrypt
from models.password_reset import ResetTicket
from utils.dates import utcnow, isoformat


class CredentialKind(enum.Enum):
    PASSWORD = 'password'
    GOOGLE = 'google'


class User(db.Model):
    __tablename__ = 'users'
    __table_args__ = (
        db.CheckConstraint(
            'password_hash IS NOT NULL OR google_id IS NOT NULL',
            name='ck_users_has_credential'),
        db.CheckConstraint(
            '(reset_token_hash IS NULL AND reset_expires_at IS NULL) OR '
            '(reset_token_hash IS NOT NULL AND reset_expires_at IS NOT NULL)',
            name='ck_users_reset_ticket_pair'),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    age = db.Column(db.Integer)
    avatar = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Credentials: a local password, a Google identity, or both
    password_hash = db.Column(db.String(128))
    google_id = db.Column(db.String(255), unique=True)

    # Pending password reset, see `reset_ticket`
    reset_token_hash = db.Column(db.String(64), index=True)
    reset_expires_at = db.Column(db.DateTime)

    # Relationships
    tasks = db.relationship('Task', backref='owner', lazy='dynamic', cascade='all, delete-orphan')

    def __init__(self, **kwargs):
        if 'email' in kwargs and kwargs['email']:
            kwargs['email'] = normalize_email(kwargs['email'])
        super().__init__(**kwargs)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        if not self.password_hash:
            return False
        return bcrypt.check_password_hash(self.password_hash, password)

    @property
    def credential_kinds(self):
        kinds = set()
        if self.password_hash:
            kinds.add(CredentialKind.PASSWORD)
        if self.google_id:
            kinds.add(CredentialKind.GOOGLE)
        return frozenset(kinds)

    @property
    def reset_ticket(self):
        if self.reset_token_hash is None and self.reset_expires_at is None:
            return None
        return ResetTicket(self.reset_token_hash, self.reset_expires_at)

    @reset_ticket.setter
    def reset_ticket(self, ticket):
        if ticket is None:
            self.reset_token_hash = None
            self.reset_expires_at = None
        else:
            self.reset_token_hash = ticket.token_hash
            self.reset_expires_at = ticket.expires_at

    def to_public_dict(self):
        """Shape returned alongside a token by the auth endpoints."""
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'age': self.age,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'age': self.age,
            'email': self.email,
            'avatar': self.avatar,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<User {self.email}>'


def normalize_email(email):
    return email.strip().lower()
