import structlog

from healthtracker.errors import Unauthenticated
from healthtracker.services import users

logger = structlog.get_logger(__name__)


class Session:
    """Single slot naming the user who is logged in, if anyone.

    Only the identity is kept; the User row is looked up on access so the
    slot outlives any one database session. A tracker owns one of these,
    nothing reads it as a module-level global.
    """

    def __init__(self):
        self._user_id = None
        self._username = None

    @property
    def user_id(self):
        return self._user_id

    @property
    def username(self):
        return self._username

    @property
    def is_authenticated(self):
        return self._user_id is not None

    @property
    def user(self):
        if self._user_id is None:
            return None
        return users.get_user(self._user_id)

    def start(self, user):
        self._user_id = user.id
        self._username = user.username
        logger.info('session_started', user_id=self._user_id, username=self._username)

    def end(self):
        if self._user_id is not None:
            logger.info('session_ended', user_id=self._user_id)
        self._user_id = None
        self._username = None

    def require_user(self):
        user = self.user
        if user is None:
            # covers a logged-in user whose row has since disappeared
            self.end()
            raise Unauthenticated()
        return user
