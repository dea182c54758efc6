"""Survey, milestone and donation models. Each may point at a participant."""
from datetime import datetime
from ellarises.extensions import db


class Survey(db.Model):
    __tablename__ = 'surveys'

    id = db.Column(db.Integer, primary_key=True)
    participant_id = db.Column(db.Integer, db.ForeignKey('participants.id', ondelete='SET NULL'), nullable=True)
    occurrence_id = db.Column(db.Integer, db.ForeignKey('event_occurrences.id', ondelete='SET NULL'), nullable=True)
    satisfaction_score = db.Column(db.Integer)  # 1-5
    usefulness_score = db.Column(db.Integer)
    recommend_score = db.Column(db.Integer)  # 0-10
    comments = db.Column(db.Text)
    submitted_at = db.Column(db.DateTime, default=datetime.utcnow)

    participant = db.relationship('Participant')
    occurrence = db.relationship('EventOccurrence')


class Milestone(db.Model):
    __tablename__ = 'milestones'

    id = db.Column(db.Integer, primary_key=True)
    participant_id = db.Column(db.Integer, db.ForeignKey('participants.id', ondelete='SET NULL'), nullable=True)
    title = db.Column(db.String(200))
    description = db.Column(db.Text)
    achieved_on = db.Column(db.Date)

    participant = db.relationship('Participant', backref='milestones')


class Donation(db.Model):
    __tablename__ = 'donations'

    id = db.Column(db.Integer, primary_key=True)
    participant_id = db.Column(db.Integer, db.ForeignKey('participants.id', ondelete='SET NULL'), nullable=True)
    donor_name = db.Column(db.String(200))
    donor_email = db.Column(db.String(120))
    amount = db.Column(db.Numeric(10, 2))
    donated_on = db.Column(db.Date)
    message = db.Column(db.Text)

    participant = db.relationship('Participant')
