"""Record store: health records scoped to their owning user.

Every mutating call commits on its own, so a failure leaves nothing
half-written behind.
"""

import structlog
from sqlalchemy.exc import SQLAlchemyError

from healthtracker.app import db
from healthtracker.errors import Forbidden, NotFound, PersistenceError
from healthtracker.models.health_record import HealthRecord
from healthtracker.models.user import User
from healthtracker.validation import format_record

logger = structlog.get_logger(__name__)


def _commit(operation):
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('persistence_error', operation=operation, error=str(exc))
        raise PersistenceError(f'{operation} failed') from exc


def _load_owned(record_id, acting_user_id):
    try:
        # reload from the database so in-memory edits cannot fake ownership
        with db.session.no_autoflush:
            stored = db.session.get(HealthRecord, record_id, populate_existing=True)
    except SQLAlchemyError as exc:
        raise PersistenceError(f'Could not read record {record_id}') from exc

    if stored is None:
        raise NotFound('HealthRecord', record_id)
    if stored.user_id != acting_user_id:
        logger.warning('ownership_violation', record_id=record_id, user_id=acting_user_id)
        raise Forbidden(record_id, acting_user_id)
    return stored


def add_record(record):
    """Persist a new record and return its id."""
    try:
        owner = db.session.get(User, record.user_id)
    except SQLAlchemyError as exc:
        raise PersistenceError('Could not read users') from exc
    if owner is None:
        raise NotFound('User', record.user_id)

    db.session.add(record)
    _commit('add_record')

    logger.info('record_added', record_id=record.id, user_id=record.user_id)
    return record.id


def get_record(record_id, acting_user_id):
    return _load_owned(record_id, acting_user_id)


def get_records_for_user(user_id):
    try:
        return (HealthRecord.query
                .filter_by(user_id=user_id)
                .order_by(HealthRecord.id.asc())
                .all())
    except SQLAlchemyError as exc:
        raise PersistenceError(f'Could not read records for user {user_id}') from exc


def update_record(record, acting_user_id):
    """Overwrite the editable fields of the stored row with ``record.id``.

    Date and owner stay as they were stored.
    """
    values = (record.weight, record.temperature, record.blood_pressure, record.note)
    stored = _load_owned(record.id, acting_user_id)

    stored.weight, stored.temperature, stored.blood_pressure, stored.note = values
    _commit('update_record')

    logger.info('record_updated', record_id=stored.id, user_id=acting_user_id)
    return stored.id


def delete_record(record, acting_user_id):
    record_id = record.id
    stored = _load_owned(record_id, acting_user_id)

    db.session.delete(stored)
    _commit('delete_record')

    logger.info('record_deleted', record_id=record_id, user_id=acting_user_id)


def export_records(user_id):
    lines = [format_record(record) for record in get_records_for_user(user_id)]
    logger.info('records_exported', user_id=user_id, count=len(lines))
    return lines
