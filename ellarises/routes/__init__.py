"""Routes package - Blueprint registration."""
from ellarises.routes.main import main_bp
from ellarises.routes.auth import auth_bp
from ellarises.routes.resources import resources_bp
from ellarises.routes.users import users_bp
from ellarises.routes.public import public_bp


def register_blueprints(app):
    """Register all blueprints with the Flask app."""
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(resources_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(public_bp)
