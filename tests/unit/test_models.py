"""
Unit tests for database models.
"""
import pytest
from datetime import date, timedelta
from sqlalchemy.exc import IntegrityError
from models import User, Task, TaskStatus, ResetTicket, CredentialKind
from utils.dates import utcnow


class TestUserModel:
    """Test cases for the User model."""

    def test_user_creation(self, db_session):
        """Test basic user creation and password hashing."""
        user = User(first_name='Ana', last_name='García', email='  Ana@Example.COM ')
        user.set_password('password123')
        db_session.add(user)
        db_session.commit()

        assert user.id is not None
        assert len(user.id) == 36
        assert user.email == 'ana@example.com'
        assert user.check_password('password123')
        assert not user.check_password('wrongpassword')
        assert user.password_hash != 'password123'
        assert user.reset_ticket is None
        assert user.avatar is None

    def test_user_email_uniqueness(self, db_session):
        """Test that email addresses must be unique."""
        user1 = User(first_name='A', last_name='B', email='unique@example.com')
        user1.set_password('password123')
        db_session.add(user1)
        db_session.commit()

        user2 = User(first_name='C', last_name='D', email='UNIQUE@example.com')
        user2.set_password('password456')
        db_session.add(user2)

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_user_needs_some_credential(self, db_session):
        """A user without password and without Google identity is rejected."""
        user = User(first_name='No', last_name='Credential', email='none@example.com')
        db_session.add(user)

        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_credential_kinds(self, db_session):
        local = User(first_name='L', last_name='L', email='local@example.com')
        local.set_password('secret1')
        google = User(first_name='G', last_name='G', email='google@example.com', google_id='g-123')
        db_session.add_all([local, google])
        db_session.commit()

        assert local.credential_kinds == {CredentialKind.PASSWORD}
        assert google.credential_kinds == {CredentialKind.GOOGLE}
        assert not google.check_password('')

        google.set_password('secret1')
        assert google.credential_kinds == {CredentialKind.PASSWORD, CredentialKind.GOOGLE}

    def test_reset_ticket_round_trip(self, db_session, test_user):
        raw_token, ticket = ResetTicket.issue()
        test_user.reset_ticket = ticket
        db_session.commit()

        stored = test_user.reset_ticket
        assert stored == ticket
        assert test_user.reset_token_hash == ResetTicket.hash_token(raw_token)
        assert test_user.reset_token_hash != raw_token

        test_user.reset_ticket = None
        db_session.commit()
        assert test_user.reset_token_hash is None
        assert test_user.reset_expires_at is None

    def test_half_reset_state_is_rejected(self, db_session, test_user):
        """The database refuses a hash without an expiry."""
        test_user.reset_token_hash = 'a' * 64
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_user_to_dict(self, test_user):
        """Profile serialization never exposes secrets."""
        test_user.google_id = 'g-1'
        _, test_user.reset_ticket = ResetTicket.issue()
        user_dict = test_user.to_dict()

        assert user_dict['email'] == 'test@example.com'
        assert user_dict['firstName'] == 'Usuario'
        assert set(user_dict) == {'id', 'firstName', 'lastName', 'age', 'email', 'avatar',
                                  'createdAt', 'updatedAt'}

    def test_user_to_public_dict(self, test_user):
        assert test_user.to_public_dict() == {
            'id': test_user.id,
            'firstName': 'Usuario',
            'lastName': 'Prueba',
            'email': 'test@example.com',
            'age': 30,
        }


class TestResetTicket:
    """Test cases for the ResetTicket value object."""

    def test_requires_both_fields(self):
        with pytest.raises(ValueError):
            ResetTicket(token_hash='abc', expires_at=None)
        with pytest.raises(ValueError):
            ResetTicket(token_hash=None, expires_at=utcnow())

    def test_issue(self):
        raw_token, ticket = ResetTicket.issue(timedelta(hours=1))

        assert len(raw_token) == 64
        assert ticket.token_hash == ResetTicket.hash_token(raw_token)
        assert ticket.token_hash != raw_token
        lifetime = ticket.expires_at - utcnow()
        assert timedelta(minutes=59) < lifetime <= timedelta(hours=1)

    def test_issue_is_random(self):
        first, _ = ResetTicket.issue()
        second, _ = ResetTicket.issue()
        assert first != second


class TestTaskModel:
    """Test cases for the Task model."""

    def test_task_creation_defaults(self, db_session, test_user):
        task = Task(user_id=test_user.id, title='Buy milk', date=date(2024, 1, 1))
        db_session.add(task)
        db_session.commit()

        assert task.id is not None
        assert task.status == TaskStatus.TODO.value == 'Por hacer'
        assert task.time is None
        assert task.owner == test_user

    def test_task_to_dict(self, test_task, test_user):
        task_dict = test_task.to_dict()
        assert task_dict['title'] == 'Buy milk'
        assert task_dict['date'] == '2024-01-01'
        assert task_dict['time'] == '09:30'
        assert task_dict['userId'] == test_user.id

    def test_status_accepts_enum_members(self, test_task):
        test_task.status = TaskStatus.DONE
        assert test_task.status == 'Hecho'

    def test_invalid_status_rejected(self, test_task):
        with pytest.raises(ValueError):
            test_task.status = 'Archived'

    def test_owner_is_immutable(self, test_task, other_user):
        with pytest.raises(ValueError):
            test_task.user_id = other_user.id

    def test_tasks_deleted_with_owner(self, db_session, test_user, test_task):
        task_id = test_task.id
        db_session.delete(test_user)
        db_session.commit()

        assert db_session.get(Task, task_id) is None

    def test_task_representation(self, test_task):
        assert repr(test_task) == '<Task Buy milk (Por hacer)>'
