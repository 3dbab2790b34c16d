import pytest

from coursedesk import create_app, db
from coursedesk.config import TestConfig
from coursedesk.models import Users, Enrollments, ROLE_STUDENT
from coursedesk.services import get_services


@pytest.fixture
def app():
    return create_app(TestConfig)


@pytest.fixture
def ctx(app):
    """App context for tests that drive the services directly."""
    with app.app_context():
        yield app
        db.session.remove()


@pytest.fixture
def services(ctx):
    return get_services()


@pytest.fixture
def user(services):
    return services.store.find_user_by_id


@pytest.fixture
def make_student(ctx):
    def _make(user_id, course_id):
        u = Users(id=user_id, username=user_id, name=f"Student {user_id}", role=ROLE_STUDENT)
        u.set_password("password")
        db.session.add(u)
        db.session.add(Enrollments(course_id=course_id, user_id=user_id))
        db.session.commit()
        return u
    return _make


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password="password"):
    return client.post("/auth/login", json={"username": username, "password": password})
