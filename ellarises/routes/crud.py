"""Generic list/add/edit/delete handlers driven by Resource declarations."""
import logging

from flask import render_template, request, redirect, url_for, flash, abort
from flask_babel import gettext as _
from sqlalchemy.exc import SQLAlchemyError

from ellarises.models import db, ROLE_MANAGER
from ellarises.routes.auth import login_required, role_required
from ellarises.services.forms import decode_form
from ellarises.services.search import apply_search

logger = logging.getLogger(__name__)


class Resource:
    """
    One record type exposed through the four-verb CRUD shape.

    Args:
        name: URL segment and endpoint prefix, e.g. 'participants'
        model: db.Model class
        fields: Field list; every add/edit writes all of them
        search: column names matched by the list view's ?search=
        columns: (attribute path, label) pairs shown in the list view
        list_roles: None for any logged-in user, else the allowed roles
        write_roles: roles allowed to add, edit and delete
    """

    def __init__(self, name, model, fields, search=(), columns=None, title=None,
                 list_roles=None, write_roles=(ROLE_MANAGER,), order_by=None):
        self.name = name
        self.model = model
        self.fields = fields
        self.search = list(search)
        self.columns = columns or [(f.name, f.label) for f in fields[:5]]
        self.title = title or name.replace('_', ' ').title()
        self.list_roles = list_roles
        self.write_roles = list(write_roles)
        self.order_by = order_by

    @property
    def ordering(self):
        if not self.order_by:
            return [self.model.id]
        if self.order_by.startswith('-'):
            return [getattr(self.model, self.order_by[1:]).desc(), self.model.id]
        return [getattr(self.model, self.order_by), self.model.id]

    @property
    def search_columns(self):
        return [getattr(self.model, column) for column in self.search]

    def endpoint(self, verb):
        return f"resources.{self.name}_{verb}"

    @staticmethod
    def display(row, path):
        value = row
        for attr in path.split('.'):
            value = getattr(value, attr, None)
            if value is None:
                return ''
        return value


def store_failure(action, resource):
    db.session.rollback()
    logger.exception("Failed to %s %s", action, resource.name)
    abort(500)


def _read_guard(resource):
    if resource.list_roles is None:
        return login_required
    return role_required(resource.list_roles)


def register_resource(bp, resource):
    """Attach list, add, edit and delete routes for ``resource`` to ``bp``."""
    model = resource.model
    read_guard = _read_guard(resource)
    write_guard = role_required(resource.write_roles)
    list_endpoint = resource.endpoint('list')

    def list_view():
        search = request.args.get('search', '')
        try:
            query = apply_search(model.query, resource.search_columns, search)
            rows = query.order_by(*resource.ordering).all()
        except SQLAlchemyError:
            store_failure('list', resource)
        return render_template('resources/list.html', resource=resource, rows=rows, search=search)

    def add_form():
        return render_template('resources/form.html', resource=resource, row=None,
                               action=url_for(resource.endpoint('add')))

    def add():
        values = decode_form(request.form, resource.fields)
        try:
            row = model(**values)
            db.session.add(row)
            db.session.commit()
        except SQLAlchemyError:
            store_failure('add', resource)
        logger.info("Added %s %s", resource.name, row.id)
        flash(_('Record added.'), 'success')
        return redirect(url_for(list_endpoint))

    def edit_form(row_id):
        row = db.get_or_404(model, row_id)
        return render_template('resources/form.html', resource=resource, row=row,
                               action=url_for(resource.endpoint('edit'), row_id=row_id))

    def edit(row_id):
        row = db.get_or_404(model, row_id)
        # Full overwrite: fields missing from the form are cleared
        for name, value in decode_form(request.form, resource.fields).items():
            setattr(row, name, value)
        try:
            db.session.commit()
        except SQLAlchemyError:
            store_failure('edit', resource)
        logger.info("Updated %s %s", resource.name, row_id)
        flash(_('Record updated.'), 'success')
        return redirect(url_for(list_endpoint))

    def delete(row_id):
        try:
            model.query.filter_by(id=row_id).delete()
            db.session.commit()
        except SQLAlchemyError:
            store_failure('delete', resource)
        logger.info("Deleted %s %s", resource.name, row_id)
        flash(_('Record deleted.'), 'success')
        return redirect(url_for(list_endpoint))

    base = f"/{resource.name}"
    prefix = resource.name
    bp.add_url_rule(base, f"{prefix}_list", read_guard(list_view))
    bp.add_url_rule(f"{base}/add", f"{prefix}_add_form", write_guard(add_form))
    bp.add_url_rule(f"{base}/add", f"{prefix}_add", write_guard(add), methods=['POST'])
    bp.add_url_rule(f"{base}/edit/<int:row_id>", f"{prefix}_edit_form", write_guard(edit_form))
    bp.add_url_rule(f"{base}/edit/<int:row_id>", f"{prefix}_edit", write_guard(edit), methods=['POST'])
    bp.add_url_rule(f"{base}/delete/<int:row_id>", f"{prefix}_delete", write_guard(delete), methods=['POST'])
