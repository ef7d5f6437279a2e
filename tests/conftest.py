import pytest

from healthapp import create_app, db
from healthapp.services.user_service import UserService


@pytest.fixture
def app():
    """
    Flask app bound to a fresh in-memory SQLite database.
    The app context stays pushed for the duration of the test.
    """
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_user(app):
    def _make_user(username="testuser", email=None, height_cm=None, **profile):
        data = {
            'username': username,
            'email': email or f"{username}@example.com",
            'password': 'Password123',
        }
        data.update(profile)
        user = UserService.create_user(data)
        if height_cm is not None:
            # Stored value written directly, as a migrated row would hold it
            user.height_cm = height_cm
            db.session.commit()
        return user
    return _make_user
