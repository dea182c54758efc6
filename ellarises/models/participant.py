"""Participant model."""
from datetime import datetime
from ellarises.extensions import db


class Participant(db.Model):
    __tablename__ = 'participants'

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    email = db.Column(db.String(120))
    phone = db.Column(db.String(40))
    date_of_birth = db.Column(db.Date)
    school = db.Column(db.String(200))
    grade = db.Column(db.String(20))
    city = db.Column(db.String(100))
    state = db.Column(db.String(50))
    zip = db.Column(db.String(20))
    field_of_interest = db.Column(db.String(200))  # e.g. arts, engineering
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @property
    def full_name(self):
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
