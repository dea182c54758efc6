"""Public forms - enrollment intake and donations, no login needed."""
import logging

from flask import Blueprint, render_template, request, abort
from sqlalchemy.exc import SQLAlchemyError

from ellarises.models import db, Enrollment, Donation
from ellarises.routes.resources import RESOURCES_BY_NAME
from ellarises.services.forms import decode_form

logger = logging.getLogger(__name__)

public_bp = Blueprint('public', __name__)

ENROLLMENT_FIELDS = RESOURCES_BY_NAME['enrollments'].fields
DONATION_FIELDS = [f for f in RESOURCES_BY_NAME['donations'].fields if f.name != 'participant_id']


def _save(row, what):
    db.session.add(row)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Failed to save public %s", what)
        abort(500)
    logger.info("Public %s %s received", what, row.id)


@public_bp.route('/enroll', methods=['GET', 'POST'])
def enroll():
    success = False
    if request.method == 'POST':
        _save(Enrollment(**decode_form(request.form, ENROLLMENT_FIELDS)), 'enrollment')
        success = True
    return render_template('public/enroll.html', fields=ENROLLMENT_FIELDS, success=success)


@public_bp.route('/donate', methods=['GET', 'POST'])
def donate():
    success = False
    if request.method == 'POST':
        _save(Donation(**decode_form(request.form, DONATION_FIELDS)), 'donation')
        success = True
    return render_template('public/donate.html', fields=DONATION_FIELDS, success=success)
