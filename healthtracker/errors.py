"""Failures raised by the account and health-record core.

Callers turn these into user-facing messages; nothing here is UI text.
"""


class TrackerError(Exception):
    """Base class for every failure the core raises."""


class ValidationError(TrackerError):
    """Input was rejected before any store call was made."""


class InvalidInput(ValidationError):
    def __init__(self, fields, message=None):
        self.fields = list(fields)
        super().__init__(message or f"Required field(s) empty or invalid: {', '.join(self.fields)}")


class InvalidNumber(ValidationError):
    def __init__(self, field, value):
        self.field = field
        self.value = value
        super().__init__(f"Field '{field}' is not a number: {value!r}")


class EmptyRecord(ValidationError):
    def __init__(self):
        super().__init__("At least one of weight, temperature, blood_pressure or note must be filled")


class NoteTooLong(ValidationError):
    def __init__(self, word_count, limit):
        self.word_count = word_count
        self.limit = limit
        super().__init__(f"Note has {word_count} words, the limit is {limit}")


class DuplicateUsername(TrackerError):
    def __init__(self, username):
        self.username = username
        super().__init__(f"Username already registered: {username}")


class Unauthenticated(TrackerError):
    def __init__(self):
        super().__init__("No user is logged in")


class Forbidden(TrackerError):
    def __init__(self, identity, user_id, kind='HealthRecord'):
        self.kind = kind
        self.identity = identity
        self.user_id = user_id
        super().__init__(f"User {user_id} may not access {kind} {identity}")


class NotFound(TrackerError):
    def __init__(self, kind, identity):
        self.kind = kind
        self.identity = identity
        super().__init__(f"{kind} {identity} does not exist")


class PersistenceError(TrackerError):
    """The backing database failed; the original exception is chained."""
