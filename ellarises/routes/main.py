"""Main routes - Index, dashboard, diagnostics, language switching."""
import logging
from datetime import datetime

from flask import Blueprint, render_template, request, redirect, make_response, jsonify, abort, current_app
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError

from ellarises.models import db, Participant, EventTemplate, EventOccurrence, Donation, Enrollment
from ellarises.routes.auth import login_required

logger = logging.getLogger(__name__)

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    return render_template('index.html')


@main_bp.route('/dashboard')
@login_required
def dashboard():
    try:
        stats = {
            'participants': Participant.query.count(),
            'events': EventTemplate.query.count(),
            'donations': Donation.query.count(),
            'donation_total': db.session.query(func.coalesce(func.sum(Donation.amount), 0)).scalar(),
            'enrollments': Enrollment.query.count(),
        }
        upcoming = (EventOccurrence.query
                    .filter(EventOccurrence.starts_at >= datetime.utcnow())
                    .order_by(EventOccurrence.starts_at)
                    .limit(5)
                    .all())
        recent_participants = Participant.query.order_by(Participant.created_at.desc()).limit(5).all()
    except SQLAlchemyError:
        logger.exception("Failed to load dashboard")
        abort(500)

    return render_template('dashboard.html', stats=stats, upcoming=upcoming,
                           recent_participants=recent_participants)


@main_bp.route('/teapot')
def teapot():
    return "I'm a teapot. I cannot brew coffee, but I can brew change.", 418


@main_bp.route('/test-db')
def test_db():
    """Liveness check against the store."""
    try:
        db.session.execute(text('SELECT 1'))
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Database check failed: %s", e)
        return jsonify(status='error', message=str(e)), 500
    return jsonify(status='ok', message='Database connection successful')


@main_bp.route('/set_language/<lang>')
def set_language(lang):
    if lang not in current_app.config['LANGUAGES']:
        lang = current_app.config['BABEL_DEFAULT_LOCALE']
    resp = make_response(redirect(request.referrer or '/'))
    resp.set_cookie('babel_translation', lang)
    return resp
