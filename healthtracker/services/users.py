"""Credential store and user directory."""

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from healthtracker.app import db
from healthtracker.errors import DuplicateUsername, Forbidden, InvalidInput, NotFound, PersistenceError
from healthtracker.models.user import MAX_PASSWORD_BYTES, User
from healthtracker.validation import require_fields

logger = structlog.get_logger(__name__)


def register(username, password, first_name, last_name):
    require_fields(username=username, password=password,
                   first_name=first_name, last_name=last_name)
    if len(password.encode('utf-8')) > MAX_PASSWORD_BYTES:
        raise InvalidInput(['password'], f'Password longer than {MAX_PASSWORD_BYTES} bytes')

    # Check if user already exists
    if get_user_by_username(username):
        logger.info('registration_rejected', username=username, reason='duplicate')
        raise DuplicateUsername(username)

    user = User(
        username=username,
        password=password,
        first_name=first_name,
        last_name=last_name,
    )

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        # another process registered the same name between the check and the commit
        db.session.rollback()
        logger.info('registration_rejected', username=username, reason='integrity')
        raise DuplicateUsername(username) from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('persistence_error', operation='register', error=str(exc))
        raise PersistenceError('Could not create user') from exc

    logger.info('user_registered', user_id=user.id, username=username)
    return user


def login(username, password):
    """True iff a user with exactly this username and password exists."""
    user = get_user_by_username(username)

    if not user or not user.check_password(password):
        logger.info('login_failed', username=username)
        return False

    logger.info('login_succeeded', user_id=user.id, username=username)
    return True


def get_user_by_username(username):
    if not username:
        return None
    try:
        return User.query.filter_by(username=username).first()
    except SQLAlchemyError as exc:
        raise PersistenceError('Could not read users') from exc


def get_user(user_id):
    try:
        return db.session.get(User, user_id)
    except SQLAlchemyError as exc:
        raise PersistenceError('Could not read users') from exc


def update_user(user, acting_user_id=None):
    """Persist the profile fields of ``user``. Username and password never change here.

    With ``acting_user_id`` the caller may only update its own profile.
    """
    user_id, first_name, last_name = user.id, user.first_name, user.last_name
    # anything else changed on a mapped User, flushed or not, is dropped here
    db.session.rollback()

    if acting_user_id is not None and user_id != acting_user_id:
        logger.warning('ownership_violation', user_id=acting_user_id, target_user_id=user_id)
        raise Forbidden(user_id, acting_user_id, kind='User')
    require_fields(first_name=first_name, last_name=last_name)

    stored = get_user(user_id)
    if stored is None:
        raise NotFound('User', user_id)

    try:
        stored.first_name = first_name
        stored.last_name = last_name
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error('persistence_error', operation='update_user', error=str(exc))
        raise PersistenceError(f'Could not update user {user_id}') from exc

    logger.info('profile_updated', user_id=stored.id)
    return stored
