"""Event template, occurrence and registration models."""
from datetime import datetime
from ellarises.extensions import db


class EventTemplate(db.Model):
    __tablename__ = 'event_templates'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200))
    event_type = db.Column(db.String(80))  # Workshop, Seminar, Summit...
    description = db.Column(db.Text)
    default_capacity = db.Column(db.Integer)

    occurrences = db.relationship('EventOccurrence', backref='template', lazy=True,
                                  cascade='all, delete-orphan', passive_deletes=True)


class EventOccurrence(db.Model):
    __tablename__ = 'event_occurrences'

    id = db.Column(db.Integer, primary_key=True)
    template_id = db.Column(db.Integer, db.ForeignKey('event_templates.id', ondelete='CASCADE'))
    starts_at = db.Column(db.DateTime)
    ends_at = db.Column(db.DateTime)
    location = db.Column(db.String(200))
    capacity = db.Column(db.Integer)
    registration_deadline = db.Column(db.DateTime)

    registrations = db.relationship('Registration', backref='occurrence', lazy=True,
                                    cascade='all, delete-orphan', passive_deletes=True)


class Registration(db.Model):
    __tablename__ = 'registrations'
    __table_args__ = (
        db.UniqueConstraint('participant_id', 'occurrence_id', name='uq_registration_participant_occurrence'),
    )

    id = db.Column(db.Integer, primary_key=True)
    participant_id = db.Column(db.Integer, db.ForeignKey('participants.id', ondelete='CASCADE'))
    occurrence_id = db.Column(db.Integer, db.ForeignKey('event_occurrences.id', ondelete='CASCADE'))
    status = db.Column(db.String(20), default='registered')  # registered, waitlisted, cancelled
    attended = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    participant = db.relationship('Participant', backref='registrations')
