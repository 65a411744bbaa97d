"""Operations the presentation layer calls.

``HealthTracker`` takes the raw form strings, validates them, and hands the
store functions the acting user's id taken from its :class:`Session`.
"""

from datetime import date

import structlog

from healthtracker.errors import Forbidden, NotFound
from healthtracker.models.health_record import HealthRecord
from healthtracker.services import records, users
from healthtracker.session import Session
from healthtracker.validation import parse_new_record, parse_record_edit, require_fields

logger = structlog.get_logger(__name__)


class HealthTracker:

    def __init__(self, session=None):
        self.session = session if session is not None else Session()

    @property
    def current_user(self):
        return self.session.user

    # Accounts

    def register(self, username, password, first_name, last_name):
        user = users.register(username, password, first_name, last_name)
        self.session.start(user)
        return user

    def login(self, username, password):
        if not users.login(username, password):
            return False
        self.session.start(users.get_user_by_username(username))
        return True

    def logout(self):
        self.session.end()

    def update_user(self, user):
        acting = self.session.require_user()
        return users.update_user(user, acting.id)

    def update_profile(self, first_name, last_name):
        acting = self.session.require_user()
        require_fields(first_name=first_name, last_name=last_name)
        acting.first_name = first_name
        acting.last_name = last_name
        return users.update_user(acting, acting.id)

    # Records

    def add_record(self, weight_text, temperature_text, blood_pressure, note):
        """Validate a new-record form and store it for the session user. Returns the new id."""
        acting = self.session.require_user()
        values = parse_new_record(weight_text, temperature_text, blood_pressure, note)

        record = HealthRecord(
            weight=values.weight,
            temperature=values.temperature,
            blood_pressure=values.blood_pressure,
            note=values.note,
            date=date.today(),
            user_id=acting.id,
        )
        return records.add_record(record)

    def edit_record(self, existing, weight_text, temperature_text, blood_pressure, note):
        """Apply an edit form to ``existing``; blank fields keep the stored value."""
        acting = self.session.require_user()
        stored = records.get_record(existing.id, acting.id)
        values = parse_record_edit(stored, weight_text, temperature_text, blood_pressure, note)

        updated = HealthRecord(
            id=stored.id,
            weight=values.weight,
            temperature=values.temperature,
            blood_pressure=values.blood_pressure,
            note=values.note,
        )
        return records.update_record(updated, acting.id)

    def delete_record(self, record):
        acting = self.session.require_user()
        records.delete_record(record, acting.id)

    def list_records(self, user_id=None):
        acting = self.session.require_user()
        if user_id is None:
            user_id = acting.id
        elif user_id != acting.id:
            logger.warning('ownership_violation', user_id=acting.id, requested_user_id=user_id)
            raise Forbidden(user_id, acting.id, kind='records of User')
        return records.get_records_for_user(user_id)

    def export_records(self, user_id=None):
        """Formatted lines for every record of the user; writing them out is the caller's job."""
        acting = self.session.require_user()
        if user_id is None:
            user_id = acting.id
        elif user_id != acting.id:
            raise Forbidden(user_id, acting.id, kind='records of User')
        return records.export_records(user_id)

    def get_user(self, username):
        user = users.get_user_by_username(username)
        if user is None:
            raise NotFound('User', username)
        return user
