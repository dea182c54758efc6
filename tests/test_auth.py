"""Login, signup, logout and the authorization gate."""
import pytest

from ellarises import create_app
from ellarises.models import db, User, ROLE_USER

from conftest import login, MANAGER_EMAIL, USER_EMAIL


def test_login_success_redirects_to_dashboard(client, manager):
    resp = login(client, MANAGER_EMAIL)
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/dashboard')
    assert client.get('/dashboard').status_code == 200


def test_login_wrong_password_stays_anonymous(client, manager):
    resp = login(client, MANAGER_EMAIL, 'wrong')
    assert resp.status_code == 200
    assert b'Invalid email or password.' in resp.data

    resp = client.get('/dashboard')
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/login')


def test_login_unknown_email(client):
    resp = login(client, 'nobody@ellarises.org')
    assert b'Invalid email or password.' in resp.data


def test_login_email_is_case_insensitive(client, manager):
    resp = login(client, MANAGER_EMAIL.upper())
    assert resp.status_code == 302


def test_anonymous_guarded_get_redirects_to_login(client):
    resp = client.get('/participants')
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/login')


def test_login_returns_to_requested_page_once(client, manager):
    client.get('/participants?search=ana')
    resp = login(client, MANAGER_EMAIL)
    assert resp.headers['Location'].endswith('/participants?search=ana')

    client.get('/logout')
    resp = login(client, MANAGER_EMAIL)
    assert resp.headers['Location'].endswith('/dashboard')


def test_manager_route_denies_user_role(staff_client):
    resp = staff_client.post('/participants/add', data={'first_name': 'Ana'})
    assert resp.status_code == 403
    assert b'Access denied' in resp.data
    assert b'Ana' not in resp.data


def test_manager_route_denies_anonymous(client):
    resp = client.post('/participants/delete/1')
    assert resp.status_code == 403


def test_user_role_can_read_lists(staff_client):
    assert staff_client.get('/participants').status_code == 200
    assert staff_client.get('/events').status_code == 200


def test_logout_destroys_session(manager_client):
    resp = manager_client.get('/logout')
    assert resp.status_code == 302
    assert manager_client.get('/dashboard').status_code == 302


def test_signup_mismatch_never_inserts(client):
    resp = client.post('/signup', data={
        'email': 'a@x.com', 'password': 'p', 'confirm_password': 'q',
    })
    assert resp.status_code == 200
    assert b'Passwords do not match.' in resp.data
    assert User.query.count() == 0


def test_signup_creates_user_and_logs_in(client):
    resp = client.post('/signup', data={
        'email': 'a@x.com', 'password': 'p', 'confirm_password': 'p',
    })
    assert resp.status_code == 302

    user = User.query.filter_by(email='a@x.com').one()
    assert user.role == ROLE_USER
    assert user.password_hash != 'p'
    assert user.check_password('p')

    # New accounts are role User; the dashboard still renders
    assert client.get('/dashboard').status_code == 200
    assert client.post('/participants/add', data={}).status_code == 403


def test_signup_duplicate_email_reports_existing(client, staff):
    resp = client.post('/signup', data={
        'email': USER_EMAIL, 'password': 'p', 'confirm_password': 'p',
    })
    assert resp.status_code == 200
    assert b'already exists' in resp.data
    assert User.query.filter_by(email=USER_EMAIL).count() == 1


def test_profile_update_changes_name_and_password(staff_client, staff):
    resp = staff_client.post('/profile', data={
        'first_name': 'Lucy', 'last_name': 'Reyes',
        'new_password': 'newpass', 'confirm_password': 'newpass',
    })
    assert resp.status_code == 302

    db.session.expire_all()
    user = db.session.get(User, staff.id)
    assert user.first_name == 'Lucy'
    assert user.check_password('newpass')


def test_profile_password_mismatch_keeps_password(staff_client, staff):
    resp = staff_client.post('/profile', data={
        'first_name': 'Lucia', 'new_password': 'a', 'confirm_password': 'b',
    })
    assert resp.status_code == 200

    db.session.expire_all()
    assert db.session.get(User, staff.id).check_password('secret')


def test_dev_login_disabled_by_default(client):
    resp = login(client, 'test@ellarises.org', 'test')
    assert resp.status_code == 200
    assert b'Invalid email or password.' in resp.data


def test_dev_login_when_enabled():
    app = create_app('testing', DEV_LOGIN_ENABLED=True)
    with app.app_context():
        db.create_all()
        client = app.test_client()
        resp = login(client, 'test@ellarises.org', 'test')
        assert resp.status_code == 302
        assert client.get('/participants/add').status_code == 200
        db.drop_all()


def test_dev_login_refused_in_production():
    with pytest.raises(RuntimeError):
        create_app('production', DEV_LOGIN_ENABLED=True)


def test_profile_mismatch_leaves_name_unchanged(staff_client, staff):
    resp = staff_client.post('/profile', data={
        'first_name': 'Hacked', 'new_password': 'a', 'confirm_password': 'b',
    })
    assert resp.status_code == 200

    db.session.expire_all()
    assert db.session.get(User, staff.id).first_name == 'Lucia'


def test_dev_login_has_no_profile_page():
    app = create_app('testing', DEV_LOGIN_ENABLED=True)
    with app.app_context():
        db.create_all()
        client = app.test_client()
        login(client, 'test@ellarises.org', 'test')
        assert b'/profile' not in client.get('/dashboard').data

        resp = client.get('/profile')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/dashboard')
        # still signed in
        assert client.get('/participants/add').status_code == 200
        db.drop_all()
