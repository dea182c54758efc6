"""
Server-side sessions.

The browser only ever holds an opaque token; the session contents live in a
pluggable store. ``MemorySessionStore`` keeps them in a dict (tests, single
process dev), ``DatabaseSessionStore`` keeps them in the ``sessions`` table.
"""
import logging
import secrets

from flask.sessions import SessionInterface, SessionMixin
from sqlalchemy import select, insert, update, delete
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.datastructures import CallbackDict

from ellarises.extensions import db
from ellarises.models import StoredSession

logger = logging.getLogger(__name__)


class ServerSideSession(CallbackDict, SessionMixin):

    def __init__(self, initial=None, sid=None, new=False):
        def on_update(self):
            self.modified = True
        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.previous_sid = None

    def regenerate(self):
        """Move the session to a fresh token, dropping the old one on save."""
        if not self.new and self.previous_sid is None:
            self.previous_sid = self.sid
        self.sid = generate_sid()
        self.modified = True


def generate_sid():
    return secrets.token_urlsafe(32)


class MemorySessionStore:

    def __init__(self):
        self._data = {}

    def load(self, sid):
        data = self._data.get(sid)
        return dict(data) if data is not None else None

    def save(self, sid, data):
        self._data[sid] = dict(data)

    def delete(self, sid):
        self._data.pop(sid, None)


class DatabaseSessionStore:
    """Sessions in the ``sessions`` table.

    Uses its own connection and transaction; never touches ``db.session``.
    """
    table = StoredSession.__table__

    def load(self, sid):
        try:
            with db.engine.connect() as conn:
                data = conn.execute(
                    select(self.table.c.data).where(self.table.c.sid == sid)
                ).scalar()
        except SQLAlchemyError:
            logger.exception("Could not load session; starting a new one")
            return None
        return dict(data) if data is not None else None

    def save(self, sid, data):
        with db.engine.begin() as conn:
            result = conn.execute(
                update(self.table).where(self.table.c.sid == sid).values(data=dict(data))
            )
            if result.rowcount == 0:
                conn.execute(insert(self.table).values(sid=sid, data=dict(data)))

    def delete(self, sid):
        with db.engine.begin() as conn:
            conn.execute(delete(self.table).where(self.table.c.sid == sid))


def make_session_store(backend):
    if backend == 'memory':
        return MemorySessionStore()
    if backend == 'database':
        return DatabaseSessionStore()
    raise ValueError(f"Unknown session backend: {backend}")


class ServerSideSessionInterface(SessionInterface):

    def __init__(self, store):
        self.store = store

    def open_session(self, app, request):
        sid = request.cookies.get(self.get_cookie_name(app))
        if sid:
            data = self.store.load(sid)
            if data is not None:
                return ServerSideSession(data, sid=sid)
        return ServerSideSession(sid=generate_sid(), new=True)

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if session.previous_sid:
            self.store.delete(session.previous_sid)
            session.previous_sid = None

        if not session:
            # Emptied an existing session: logout
            if session.modified and not session.new:
                self.store.delete(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
                logger.debug("Session destroyed")
            return

        if not self.should_set_cookie(app, session):
            return

        self.store.save(session.sid, dict(session))
        response.set_cookie(
            name,
            session.sid,
            expires=self.get_expiration_time(app, session),
            httponly=self.get_cookie_httponly(app),
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
            domain=domain,
            path=path,
        )
