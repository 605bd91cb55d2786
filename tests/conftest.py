"""
Pytest configuration and shared fixtures for the test suite.
"""
import pytest
from app import create_app
from extensions import db
from models import User, Task, TaskStatus
from services.token_service import issue_token
from datetime import date


@pytest.fixture(scope='function')
def app(tmp_path):
    """Create application for testing."""
    app = create_app('testing')
    app.config.update({
        'UPLOAD_FOLDER': str(tmp_path / 'uploads'),
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """Create test CLI runner."""
    return app.test_cli_runner()


@pytest.fixture
def db_session(app):
    """Create database session."""
    with app.app_context():
        yield db.session


@pytest.fixture
def test_user(db_session):
    """Create test user."""
    user = User(
        first_name='Usuario',
        last_name='Prueba',
        email='test@example.com',
        age=30
    )
    user.set_password('password123')
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def other_user(db_session):
    """A second account, for ownership checks."""
    user = User(
        first_name='Otra',
        last_name='Persona',
        email='other@example.com',
        age=41
    )
    user.set_password('otherpass456')
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def test_task(db_session, test_user):
    """Create test task."""
    task = Task(
        user_id=test_user.id,
        title='Buy milk',
        detail='Semi-skimmed',
        date=date(2024, 1, 1),
        time='09:30',
    )
    db_session.add(task)
    db_session.commit()
    return task


def bearer(user):
    return {'Authorization': f'Bearer {issue_token(user.id, user.email)}'}


@pytest.fixture
def auth_headers(test_user):
    """Authorization headers carrying a real token for the test user."""
    return bearer(test_user)


@pytest.fixture
def other_auth_headers(other_user):
    return bearer(other_user)


@pytest.fixture
def headers_for(app):
    """Build authorization headers for any user."""
    return bearer


@pytest.fixture
def sample_signup_data():
    """Sample signup payload for testing."""
    return {
        'firstName': 'Ana',
        'lastName': 'García',
        'age': 28,
        'email': 'a@x.com',
        'password': 'secret1'
    }


@pytest.fixture
def sample_task_data():
    """Sample task payload for testing."""
    return {
        'title': 'Buy milk',
        'detail': 'Two bottles',
        'date': '2024-01-01',
        'time': '14:30',
        'status': TaskStatus.DOING.value
    }
