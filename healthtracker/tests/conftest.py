import pytest
from healthtracker.app import create_app, db
from healthtracker.tracker import HealthTracker

@pytest.fixture
def app():
    """Create application for the tests."""
    app = create_app('testing')

    # Create tables
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

@pytest.fixture
def tracker(app):
    """A tracker with nobody logged in."""
    return HealthTracker()

@pytest.fixture
def alice(tracker):
    """Register alice; the tracker's session is left logged in as her."""
    return tracker.register('alice', 'pw1', 'Alice', 'Lee')

@pytest.fixture
def bob(app):
    """Register bob through a separate tracker so the main session is untouched."""
    other = HealthTracker()
    user = other.register('bob', 'pw2', 'Bob', 'Stone')
    other.add_record('80', '37.0', '130/85', 'bob note')
    return user
