"""Enrollment model - public intake submissions, no foreign keys."""
from datetime import datetime
from ellarises.extensions import db


class Enrollment(db.Model):
    __tablename__ = 'enrollments'

    id = db.Column(db.Integer, primary_key=True)
    parent_guardian_name = db.Column(db.String(200))
    phone = db.Column(db.String(40))
    email = db.Column(db.String(120))
    participant_name = db.Column(db.String(200))
    participant_dob = db.Column(db.Date)
    grade = db.Column(db.String(20))
    school = db.Column(db.String(200))
    program_interest = db.Column(db.Text)
    mariachi_instrument = db.Column(db.String(100))
    instrument_experience = db.Column(db.Text)
    fee_status = db.Column(db.String(50))
    tuition_agreement = db.Column(db.Boolean, default=False)
    language_preference = db.Column(db.String(20))  # English, Spanish
    medical_consent = db.Column(db.Boolean, default=False)
    photo_consent = db.Column(db.Boolean, default=False)
    liability_release = db.Column(db.Boolean, default=False)
    parent_signature = db.Column(db.String(200))
    submitted_at = db.Column(db.DateTime, default=datetime.utcnow)
