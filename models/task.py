"""Task model definition.
A dated to-do item owned by exactly one user.
"""
import enum
import uuid

from sqlalchemy.orm import validates

from extensions import db
from utils.dates import utcnow, isoformat


class TaskStatus(str, enum.Enum):
    TODO = 'Por hacer'
    DOING = 'Haciendo'
    DONE = 'Hecho'

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class Task(db.Model):
    __tablename__ = 'tasks'

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('users.id', ondelete='CASCADE'),
                        nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    detail = db.Column(db.Text)
    date = db.Column(db.Date, nullable=False)
    time = db.Column(db.String(5))  # HH:MM, 24h
    status = db.Column(db.String(20), nullable=False, default=TaskStatus.TODO.value)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    @validates('user_id')
    def validate_user_id(self, key, value):
        if self.user_id is not None and value != self.user_id:
            raise ValueError('A task cannot change owner')
        return value

    @validates('status')
    def validate_status(self, key, value):
        if isinstance(value, TaskStatus):
            value = value.value
        if value not in TaskStatus.values():
            raise ValueError(f'Invalid task status: {value}')
        return value

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'detail': self.detail,
            'date': self.date.isoformat() if self.date else None,
            'time': self.time,
            'status': self.status,
            'userId': self.user_id,
            'createdAt': isoformat(self.created_at),
            'updatedAt': isoformat(self.updated_at),
        }

    def __repr__(self):
        return f'<Task {self.title} ({self.status})>'
