"""Server-side session stores and cookie handling."""
import pytest

from ellarises import create_app
from ellarises.models import db, User, StoredSession
from ellarises.sessions import MemorySessionStore, DatabaseSessionStore, make_session_store

from conftest import login, MANAGER_EMAIL, make_user, PASSWORD

COOKIE = 'ellarises_session'


def test_memory_store_round_trip():
    store = MemorySessionStore()
    assert store.load('abc') is None
    store.save('abc', {'user_id': 1})
    assert store.load('abc') == {'user_id': 1}
    store.delete('abc')
    store.delete('abc')
    assert store.load('abc') is None


def test_make_session_store_rejects_unknown_backend():
    with pytest.raises(ValueError):
        make_session_store('redis')


def test_cookie_holds_only_an_opaque_token(manager_client, app):
    cookie = manager_client.get_cookie(COOKIE)
    assert cookie is not None
    assert 'Marisol' not in cookie.value
    assert app.session_interface.store.load(cookie.value)['user_role'] == 'Manager'


def test_login_moves_session_to_new_token(client, app, manager):
    client.get('/dashboard')  # stores return_to in an anonymous session
    before = client.get_cookie(COOKIE).value

    login(client, MANAGER_EMAIL)
    after = client.get_cookie(COOKIE).value

    assert after != before
    assert app.session_interface.store.load(before) is None
    assert app.session_interface.store.load(after)['user_id'] == manager.id


def test_logout_removes_stored_session(manager_client, app):
    token = manager_client.get_cookie(COOKIE).value
    manager_client.get('/logout')
    assert app.session_interface.store.load(token) is None
    assert manager_client.get_cookie(COOKIE) is None


def test_database_backed_sessions():
    app = create_app('testing', SESSION_BACKEND='database')
    with app.app_context():
        db.create_all()
        assert isinstance(app.session_interface.store, DatabaseSessionStore)
        make_user('db@ellarises.org', 'Manager')

        client = app.test_client()
        login(client, 'db@ellarises.org', PASSWORD)
        assert client.get('/dashboard').status_code == 200
        assert StoredSession.query.count() == 1

        client.get('/logout')
        assert StoredSession.query.count() == 0
        db.drop_all()


def test_rejected_profile_edit_not_saved_with_database_sessions():
    app = create_app('testing', SESSION_BACKEND='database')
    with app.app_context():
        db.create_all()
        user_id = make_user('db@ellarises.org', 'User', first_name='Original').id

        client = app.test_client()
        login(client, 'db@ellarises.org', PASSWORD)
        resp = client.post('/profile', data={
            'first_name': 'Hacked', 'new_password': 'a', 'confirm_password': 'b',
        })
        assert resp.status_code == 200
        assert b'Passwords do not match.' in resp.data
        assert StoredSession.query.count() == 1

        db.session.rollback()
        db.session.expire_all()
        assert db.session.get(User, user_id).first_name == 'Original'
        db.drop_all()


def test_unreadable_session_table_starts_fresh_session(caplog):
    app = create_app('testing', SESSION_BACKEND='database')
    with app.app_context():
        db.create_all()
        make_user('db@ellarises.org', 'Manager')

        client = app.test_client()
        login(client, 'db@ellarises.org', PASSWORD)
        StoredSession.__table__.drop(db.engine)

        resp = client.get('/test-db')
        assert resp.status_code == 200
        assert resp.get_json()['status'] == 'ok'
        assert 'Could not load session' in caplog.text
        db.drop_all()
