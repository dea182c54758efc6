"""Organization, contact and grant models."""
from ellarises.extensions import db


class Organization(db.Model):
    __tablename__ = 'organizations'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200))
    org_type = db.Column(db.String(80))  # foundation, school, business...
    website = db.Column(db.String(200))
    phone = db.Column(db.String(40))
    address = db.Column(db.String(300))

    contacts = db.relationship('Contact', backref='organization', lazy=True)
    grants = db.relationship('Grant', backref='organization', lazy=True)


class Contact(db.Model):
    __tablename__ = 'contacts'

    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(db.Integer, db.ForeignKey('organizations.id', ondelete='CASCADE'))
    first_name = db.Column(db.String(100))
    last_name = db.Column(db.String(100))
    email = db.Column(db.String(120))
    phone = db.Column(db.String(40))
    title = db.Column(db.String(100))


class Grant(db.Model):
    __tablename__ = 'grants'

    id = db.Column(db.Integer, primary_key=True)
    organization_id = db.Column(db.Integer, db.ForeignKey('organizations.id', ondelete='CASCADE'))
    name = db.Column(db.String(200))
    amount = db.Column(db.Numeric(12, 2))
    status = db.Column(db.String(30))  # applied, awarded, declined
    applied_on = db.Column(db.Date)
    awarded_on = db.Column(db.Date)
    notes = db.Column(db.Text)
