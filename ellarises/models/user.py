"""User model."""
from datetime import datetime
from werkzeug.security import generate_password_hash, check_password_hash
from ellarises.extensions import db

ROLE_MANAGER = 'Manager'
ROLE_USER = 'User'
VALID_ROLES = [ROLE_MANAGER, ROLE_USER]


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)  # Manager, User
    password_hash = db.Column(db.String(256), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash or password is None:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def display_name(self):
        name = f"{self.first_name or ''} {self.last_name or ''}".strip()
        return name or self.email

    @property
    def is_manager(self):
        return self.role == ROLE_MANAGER
