"""Record-keeping routes - one Resource declaration per table."""
from flask import Blueprint

from ellarises.models import (
    ROLE_MANAGER, Participant, EventTemplate, EventOccurrence, Registration,
    Survey, Milestone, Donation, Organization, Contact, Grant, Enrollment,
)
from ellarises.routes.crud import Resource, register_resource
from ellarises.services.forms import Field

resources_bp = Blueprint('resources', __name__)


def participant_choices():
    rows = Participant.query.order_by(Participant.last_name, Participant.first_name).all()
    return [(p.id, p.full_name or f"#{p.id}") for p in rows]


def template_choices():
    return [(t.id, t.name or f"#{t.id}") for t in EventTemplate.query.order_by(EventTemplate.name).all()]


def occurrence_choices():
    rows = EventOccurrence.query.order_by(EventOccurrence.starts_at).all()
    choices = []
    for occurrence in rows:
        name = occurrence.template.name if occurrence.template else f"#{occurrence.id}"
        when = occurrence.starts_at.strftime('%Y-%m-%d %H:%M') if occurrence.starts_at else ''
        choices.append((occurrence.id, f"{name} {when}".strip()))
    return choices


def organization_choices():
    return [(o.id, o.name or f"#{o.id}") for o in Organization.query.order_by(Organization.name).all()]


RESOURCES = [
    Resource(
        'participants', Participant,
        fields=[
            Field('first_name'),
            Field('last_name'),
            Field('email'),
            Field('phone'),
            Field('date_of_birth', 'date'),
            Field('school'),
            Field('grade'),
            Field('city'),
            Field('state'),
            Field('zip', label='ZIP'),
            Field('field_of_interest'),
        ],
        search=['first_name', 'last_name', 'email', 'school', 'city'],
        columns=[('first_name', 'First Name'), ('last_name', 'Last Name'), ('email', 'Email'),
                 ('school', 'School'), ('grade', 'Grade')],
        order_by='last_name',
    ),
    Resource(
        'events', EventTemplate,
        title='Event Templates',
        fields=[
            Field('name'),
            Field('event_type', 'select', choices=['Workshop', 'Seminar', 'Summit', 'Camp', 'Performance']),
            Field('description', 'textarea'),
            Field('default_capacity', 'int'),
        ],
        search=['name', 'event_type', 'description'],
        order_by='name',
    ),
    Resource(
        'occurrences', EventOccurrence,
        title='Event Occurrences',
        fields=[
            Field('template_id', 'fk', label='Event', choices=template_choices),
            Field('starts_at', 'datetime'),
            Field('ends_at', 'datetime'),
            Field('location'),
            Field('capacity', 'int'),
            Field('registration_deadline', 'datetime'),
        ],
        search=['location'],
        columns=[('template.name', 'Event'), ('starts_at', 'Starts'), ('ends_at', 'Ends'),
                 ('location', 'Location'), ('capacity', 'Capacity')],
        order_by='-starts_at',
    ),
    Resource(
        'registrations', Registration,
        fields=[
            Field('participant_id', 'fk', label='Participant', choices=participant_choices),
            Field('occurrence_id', 'fk', label='Event', choices=occurrence_choices),
            Field('status', 'select', choices=['registered', 'waitlisted', 'cancelled']),
            Field('attended', 'bool'),
        ],
        search=['status'],
        columns=[('participant.full_name', 'Participant'), ('occurrence.template.name', 'Event'),
                 ('status', 'Status'), ('attended', 'Attended'), ('created_at', 'Created')],
        order_by='-created_at',
    ),
    Resource(
        'surveys', Survey,
        fields=[
            Field('participant_id', 'fk', label='Participant', choices=participant_choices),
            Field('occurrence_id', 'fk', label='Event', choices=occurrence_choices),
            Field('satisfaction_score', 'int'),
            Field('usefulness_score', 'int'),
            Field('recommend_score', 'int'),
            Field('comments', 'textarea'),
        ],
        search=['comments'],
        order_by='-submitted_at',
    ),
    Resource(
        'milestones', Milestone,
        fields=[
            Field('participant_id', 'fk', label='Participant', choices=participant_choices),
            Field('title'),
            Field('description', 'textarea'),
            Field('achieved_on', 'date'),
        ],
        search=['title', 'description'],
        order_by='-achieved_on',
    ),
    Resource(
        'donations', Donation,
        fields=[
            Field('participant_id', 'fk', label='Participant', choices=participant_choices),
            Field('donor_name'),
            Field('donor_email'),
            Field('amount', 'decimal', digits=(10, 2)),
            Field('donated_on', 'date'),
            Field('message', 'textarea'),
        ],
        search=['donor_name', 'donor_email', 'message'],
        columns=[('donor_name', 'Donor'), ('donor_email', 'Email'), ('amount', 'Amount'),
                 ('donated_on', 'Date'), ('message', 'Message')],
        order_by='-donated_on',
    ),
    Resource(
        'organizations', Organization,
        fields=[
            Field('name'),
            Field('org_type', label='Type'),
            Field('website'),
            Field('phone'),
            Field('address'),
        ],
        search=['name', 'org_type', 'address'],
        order_by='name',
    ),
    Resource(
        'contacts', Contact,
        fields=[
            Field('organization_id', 'fk', label='Organization', choices=organization_choices),
            Field('first_name'),
            Field('last_name'),
            Field('email'),
            Field('phone'),
            Field('title'),
        ],
        search=['first_name', 'last_name', 'email', 'title'],
        columns=[('organization.name', 'Organization'), ('first_name', 'First Name'),
                 ('last_name', 'Last Name'), ('email', 'Email'), ('title', 'Title')],
        order_by='last_name',
    ),
    Resource(
        'grants', Grant,
        fields=[
            Field('organization_id', 'fk', label='Organization', choices=organization_choices),
            Field('name'),
            Field('amount', 'decimal', digits=(12, 2)),
            Field('status', 'select', choices=['applied', 'awarded', 'declined']),
            Field('applied_on', 'date'),
            Field('awarded_on', 'date'),
            Field('notes', 'textarea'),
        ],
        search=['name', 'status', 'notes'],
        columns=[('organization.name', 'Organization'), ('name', 'Grant'), ('amount', 'Amount'),
                 ('status', 'Status'), ('applied_on', 'Applied')],
        order_by='-applied_on',
    ),
    Resource(
        'enrollments', Enrollment,
        list_roles=[ROLE_MANAGER],
        fields=[
            Field('parent_guardian_name'),
            Field('phone'),
            Field('email'),
            Field('participant_name'),
            Field('participant_dob', 'date', label='Participant Date of Birth'),
            Field('grade'),
            Field('school'),
            Field('program_interest', 'textarea'),
            Field('mariachi_instrument'),
            Field('instrument_experience', 'textarea'),
            Field('fee_status'),
            Field('tuition_agreement', 'bool'),
            Field('language_preference', 'select', choices=['English', 'Spanish']),
            Field('medical_consent', 'bool'),
            Field('photo_consent', 'bool'),
            Field('liability_release', 'bool'),
            Field('parent_signature'),
        ],
        search=['parent_guardian_name', 'participant_name', 'email', 'school', 'program_interest'],
        columns=[('participant_name', 'Participant'), ('parent_guardian_name', 'Parent / Guardian'),
                 ('email', 'Email'), ('program_interest', 'Program'), ('submitted_at', 'Submitted')],
        order_by='-submitted_at',
    ),
]

RESOURCES_BY_NAME = {resource.name: resource for resource in RESOURCES}

for _resource in RESOURCES:
    register_resource(resources_bp, _resource)
