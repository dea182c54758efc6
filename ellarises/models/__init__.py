"""Models package - Re-exports all models for convenient importing."""
from ellarises.extensions import db
from ellarises.models.user import User, ROLE_MANAGER, ROLE_USER, VALID_ROLES
from ellarises.models.participant import Participant
from ellarises.models.event import EventTemplate, EventOccurrence, Registration
from ellarises.models.records import Survey, Milestone, Donation
from ellarises.models.organization import Organization, Contact, Grant
from ellarises.models.enrollment import Enrollment
from ellarises.models.session import StoredSession

__all__ = [
    'db', 'User', 'ROLE_MANAGER', 'ROLE_USER', 'VALID_ROLES',
    'Participant', 'EventTemplate', 'EventOccurrence', 'Registration',
    'Survey', 'Milestone', 'Donation', 'Organization', 'Contact', 'Grant',
    'Enrollment', 'StoredSession',
]
