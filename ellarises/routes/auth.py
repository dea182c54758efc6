"""Authentication routes and decorators."""
import hmac
import logging
from functools import wraps

from flask import Blueprint, redirect, url_for, session, request, render_template, flash, abort, g, current_app
from flask_babel import gettext as _
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ellarises.models import db, User, ROLE_MANAGER, ROLE_USER

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)

DEV_USER_ID = 0


class AuthContext:
    """Who is making the current request, restored from the session."""

    def __init__(self, user_id=None, role=None, name=None):
        self.user_id = user_id
        self.role = role
        self.name = name

    @property
    def is_authenticated(self):
        return self.user_id is not None

    @property
    def is_manager(self):
        return self.is_authenticated and self.role == ROLE_MANAGER

    @property
    def has_profile(self):
        return self.is_authenticated and self.user_id != DEV_USER_ID


def current_auth():
    if 'auth' not in g:
        load_auth_context()
    return g.auth


@auth_bp.before_app_request
def load_auth_context():
    if 'user_id' in session:
        g.auth = AuthContext(session['user_id'], session.get('user_role'), session.get('user_name'))
    else:
        g.auth = AuthContext()


@auth_bp.app_context_processor
def inject_auth():
    return dict(auth=current_auth())


def _is_local_path(target):
    return bool(target) and target.startswith('/') and not target.startswith('//')


# ==================== RBAC Decorators (MUST be defined before routes that use them) ====================

def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_auth().is_authenticated:
            if request.method == 'GET':
                session['return_to'] = request.full_path.rstrip('?')
            return redirect(url_for('auth.login'))
        return f(*args, **kwargs)
    return decorated_function


def role_required(roles):
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            auth = current_auth()
            if not auth.is_authenticated or auth.role not in roles:
                abort(403)  # Forbidden
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def manager_required(f):
    return role_required([ROLE_MANAGER])(f)


# ==================== Session helpers ====================

def start_session(user_id, role, name):
    """Authenticate the session and send the caller where they were headed."""
    return_to = session.pop('return_to', None)
    session.clear()
    session.regenerate()
    session['user_id'] = user_id
    session['user_role'] = role
    session['user_name'] = name
    if _is_local_path(return_to):
        return redirect(return_to)
    return redirect(url_for('main.dashboard'))


def _dev_login_matches(email, password):
    config = current_app.config
    if not config.get('DEV_LOGIN_ENABLED'):
        return False
    return (email == config['DEV_LOGIN_EMAIL'].lower()
            and hmac.compare_digest(password.encode(), config['DEV_LOGIN_PASSWORD'].encode()))


# ==================== Routes ====================

@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    error = None
    if request.method == 'POST':
        email = (request.form.get('email') or '').strip().lower()
        password = request.form.get('password') or ''

        if _dev_login_matches(email, password):
            logger.warning("Development login used for %s", email)
            return start_session(DEV_USER_ID, ROLE_MANAGER, 'Developer')

        try:
            user = User.query.filter_by(email=email).first()
        except SQLAlchemyError:
            logger.exception("Login lookup failed")
            abort(500)

        if user is None or not user.check_password(password):
            logger.info("Failed login for %s", email)
            error = _('Invalid email or password.')
        else:
            logger.info("User %s logged in", user.id)
            return start_session(user.id, user.role, user.display_name)

    return render_template('auth/login.html', error=error)


@auth_bp.route('/signup', methods=['GET', 'POST'])
def signup():
    error = None
    if request.method == 'POST':
        email = (request.form.get('email') or '').strip().lower()
        password = request.form.get('password') or ''
        confirm_password = request.form.get('confirm_password') or ''

        if not email or not password:
            error = _('Email and password are required.')
        elif password != confirm_password:
            error = _('Passwords do not match.')

        if error is None:
            user = User(
                email=email,
                first_name=request.form.get('first_name'),
                last_name=request.form.get('last_name'),
                role=ROLE_USER,
            )
            user.set_password(password)
            db.session.add(user)
            try:
                db.session.commit()
            except IntegrityError:
                # Unique email constraint
                db.session.rollback()
                error = _('An account with that email already exists.')
            except SQLAlchemyError:
                db.session.rollback()
                logger.exception("Signup insert failed")
                abort(500)
            else:
                logger.info("Created account %s", user.id)
                return start_session(user.id, user.role, user.display_name)

    return render_template('auth/signup.html', error=error, form=request.form)


@auth_bp.route('/logout')
def logout():
    session.clear()
    return redirect('/')


@auth_bp.route('/profile', methods=['GET', 'POST'])
@login_required
def profile():
    if not current_auth().has_profile:
        flash(_('The development login has no profile.'), 'info')
        return redirect(url_for('main.dashboard'))

    user = db.session.get(User, current_auth().user_id)
    if not user:
        session.clear()
        return redirect(url_for('auth.login'))

    if request.method == 'POST':
        new_password = request.form.get('new_password')
        confirm_password = request.form.get('confirm_password')
        if new_password and new_password != confirm_password:
            flash(_('Passwords do not match.'), 'error')
            return render_template('auth/profile.html', user=user)

        user.first_name = request.form.get('first_name')
        user.last_name = request.form.get('last_name')
        if new_password:
            user.set_password(new_password)

        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Profile update failed for %s", user.id)
            abort(500)
        session['user_name'] = user.display_name
        flash(_('Profile updated.'), 'success')
        return redirect(url_for('auth.profile'))

    return render_template('auth/profile.html', user=user)
