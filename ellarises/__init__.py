"""
Ella Rises Admin - Application Factory
"""
import logging
import os
from datetime import date, datetime
from decimal import Decimal

from flask import Flask, request, render_template
from dotenv import load_dotenv
from sqlalchemy import event

from ellarises.extensions import db, babel
from ellarises.routes import register_blueprints
from ellarises.sessions import ServerSideSessionInterface, make_session_store
from config.settings import config

logger = logging.getLogger(__name__)


def get_locale():
    """Determine the best locale for the user."""
    lang = request.cookies.get('babel_translation')
    if lang:
        return lang
    return request.accept_languages.best_match(['en', 'es'])


def configure_logging(app):
    logging.basicConfig(
        level=getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )


def _foreign_keys_on(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def enable_sqlite_foreign_keys(app):
    """SQLite ignores ON DELETE rules unless each connection opts in."""
    with app.app_context():
        if db.engine.dialect.name == 'sqlite':
            event.listen(db.engine, 'connect', _foreign_keys_on)


def create_app(config_name=None, **overrides):
    """Application Factory."""
    load_dotenv()

    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config.get(config_name, config['default']))
    app.config.update(overrides)

    if app.config.get('PRODUCTION') and app.config.get('DEV_LOGIN_ENABLED'):
        raise RuntimeError("DEV_LOGIN_ENABLED must not be set in production")

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    enable_sqlite_foreign_keys(app)
    babel.init_app(app, locale_selector=get_locale)
    app.session_interface = ServerSideSessionInterface(make_session_store(app.config['SESSION_BACKEND']))

    # Context processor for templates
    @app.context_processor
    def inject_conf_var():
        return dict(get_locale=get_locale)

    # Register blueprints
    register_blueprints(app)
    register_error_handlers(app)

    # CLI Commands
    register_cli_commands(app)

    logger.info("Ella Rises admin created (%s)", config_name)
    return app


def register_error_handlers(app):
    """Fixed pages for denied, missing and failed requests."""

    @app.errorhandler(403)
    def forbidden(error):
        return render_template('errors/403.html'), 403

    @app.errorhandler(404)
    def not_found(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def server_error(error):
        db.session.rollback()
        logger.error("Server error on %s %s", request.method, request.path)
        return render_template('errors/500.html'), 500


def register_cli_commands(app):
    """Register CLI commands."""

    @app.cli.command("init-db")
    def init_db_command():
        """Creates database tables."""
        db.create_all()
        print("Initialized the database.")

    @app.cli.command("seed-db")
    def seed_db_command():
        """Seeds accounts and sample records into an empty database."""
        if not app.config.get('ALLOW_SEED'):
            print("Seeding is disabled in this environment.")
            return
        db.create_all()
        if seed_database():
            print("Seeded the database (admin@ellarises.org/admin, user@ellarises.org/user).")
        else:
            print("Database already has accounts; nothing seeded.")


def seed_database():
    """Insert demo accounts and records. Returns False if accounts already exist."""
    from ellarises.models import (
        User, Participant, EventTemplate, EventOccurrence, Donation, Milestone,
        ROLE_MANAGER, ROLE_USER,
    )

    if User.query.count() > 0:
        return False

    admin = User(email='admin@ellarises.org', first_name='Admin', role=ROLE_MANAGER)
    admin.set_password('admin')
    user = User(email='user@ellarises.org', first_name='Staff', role=ROLE_USER)
    user.set_password('user')
    db.session.add_all([admin, user])

    maria = Participant(first_name='Maria', last_name='Garcia', school='Provo High', grade='11')
    db.session.add_all([
        maria,
        Participant(first_name='Sofia', last_name='Rodriguez', school='Timpview', grade='10'),
        Participant(first_name='Isabella', last_name='Martinez', school='Orem High', grade='12'),
    ])

    workshop = EventTemplate(name='Art & Engineering Workshop', event_type='Workshop', default_capacity=25)
    summit = EventTemplate(name='Leadership Summit', event_type='Seminar', default_capacity=40)
    coding = EventTemplate(name='Coding for Creatives', event_type='Workshop', default_capacity=15)
    db.session.add_all([workshop, summit, coding])
    db.session.add_all([
        EventOccurrence(template=workshop, starts_at=datetime(2025, 10, 15, 17), capacity=25, location='Provo Library'),
        EventOccurrence(template=summit, starts_at=datetime(2025, 11, 1, 9), capacity=40, location='UVU Ballroom'),
        EventOccurrence(template=coding, starts_at=datetime(2025, 12, 10, 17), capacity=15, location='Orem Rec Center'),
    ])

    db.session.add_all([
        Donation(donor_name='John Doe', amount=Decimal('100.00'), donated_on=date(2025, 9, 1),
                 message='Keep up the good work!'),
        Donation(donor_name='Jane Smith', amount=Decimal('250.50'), donated_on=date(2025, 10, 5),
                 message='For the kids.'),
        Milestone(participant=maria, title='First Workshop', description='Attended their first workshop',
                  achieved_on=date(2025, 10, 15)),
    ])
    db.session.commit()
    return True
