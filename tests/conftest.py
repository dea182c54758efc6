import pytest

from ellarises import create_app
from ellarises.models import db, User, ROLE_MANAGER, ROLE_USER

MANAGER_EMAIL = 'manager@ellarises.org'
USER_EMAIL = 'staff@ellarises.org'
PASSWORD = 'secret'


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email, role, first_name=None):
    user = User(email=email, role=role, first_name=first_name)
    user.set_password(PASSWORD)
    db.session.add(user)
    db.session.commit()
    return user


def login(client, email, password=PASSWORD):
    return client.post('/login', data={'email': email, 'password': password})


@pytest.fixture
def manager(app):
    return make_user(MANAGER_EMAIL, ROLE_MANAGER, first_name='Marisol')


@pytest.fixture
def staff(app):
    return make_user(USER_EMAIL, ROLE_USER, first_name='Lucia')


@pytest.fixture
def manager_client(client, manager):
    login(client, MANAGER_EMAIL)
    return client


@pytest.fixture
def staff_client(client, staff):
    login(client, USER_EMAIL)
    return client
