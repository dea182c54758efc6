"""User management routes - Manager only."""
import logging

from flask import Blueprint, render_template, redirect, url_for, request, flash, abort
from flask_babel import gettext as _
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ellarises.models import db, User, VALID_ROLES, ROLE_USER
from ellarises.routes.auth import manager_required, current_auth
from ellarises.services.search import apply_search

logger = logging.getLogger(__name__)

users_bp = Blueprint('users', __name__)


def _role_from_form():
    role = request.form.get('role')
    return role if role in VALID_ROLES else ROLE_USER


@users_bp.route('/users')
@manager_required
def users_list():
    """List accounts, optionally filtered by ?search=."""
    search = request.args.get('search', '')
    try:
        query = apply_search(User.query, [User.email, User.first_name, User.last_name], search)
        users = query.order_by(User.email).all()
    except SQLAlchemyError:
        logger.exception("Failed to list users")
        abort(500)
    return render_template('users/list.html', users=users, search=search,
                           current_user_id=current_auth().user_id)


@users_bp.route('/users/add')
@manager_required
def user_create_form():
    return render_template('users/form.html', user=None, valid_roles=VALID_ROLES,
                           action=url_for('users.create_user'))


@users_bp.route('/users/add', methods=['POST'])
@manager_required
def create_user():
    """Provision an account from the admin panel."""
    email = (request.form.get('email') or '').strip().lower()
    password = request.form.get('password') or ''

    if not email or not password:
        flash(_('Email and password are required.'), 'error')
        return redirect(url_for('users.user_create_form'))

    user = User(
        email=email,
        first_name=request.form.get('first_name'),
        last_name=request.form.get('last_name'),
        role=_role_from_form(),
    )
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        flash(_('An account with that email already exists.'), 'error')
        return redirect(url_for('users.user_create_form'))
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to create user %s", email)
        abort(500)

    logger.info("Manager %s created user %s", current_auth().user_id, user.id)
    flash(_('User created.'), 'success')
    return redirect(url_for('users.users_list'))


@users_bp.route('/users/edit/<int:user_id>')
@manager_required
def user_edit_form(user_id):
    user = db.get_or_404(User, user_id)
    return render_template('users/form.html', user=user, valid_roles=VALID_ROLES,
                           action=url_for('users.update_user', user_id=user_id))


@users_bp.route('/users/edit/<int:user_id>', methods=['POST'])
@manager_required
def update_user(user_id):
    """Overwrite account details; the password only changes when a new one is given."""
    user = db.get_or_404(User, user_id)

    user.email = (request.form.get('email') or user.email).strip().lower()
    user.first_name = request.form.get('first_name')
    user.last_name = request.form.get('last_name')

    # Managers cannot demote themselves
    if user.id != current_auth().user_id:
        user.role = _role_from_form()

    password = request.form.get('password')
    if password:
        user.set_password(password)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        flash(_('An account with that email already exists.'), 'error')
        return redirect(url_for('users.user_edit_form', user_id=user_id))
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to update user %s", user_id)
        abort(500)

    flash(_('User updated.'), 'success')
    return redirect(url_for('users.users_list'))


@users_bp.route('/users/delete/<int:user_id>', methods=['POST'])
@manager_required
def delete_user(user_id):
    if user_id == current_auth().user_id:
        flash(_('You cannot delete your own account.'), 'error')
        return redirect(url_for('users.users_list'))

    try:
        User.query.filter_by(id=user_id).delete()
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to delete user %s", user_id)
        abort(500)

    logger.info("Manager %s deleted user %s", current_auth().user_id, user_id)
    flash(_('User deleted.'), 'success')
    return redirect(url_for('users.users_list'))
