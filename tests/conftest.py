"""
Pytest configuration for all tests.
Each test gets its own ledger database, upload folder and log folder.
"""

import pytest

from healthchain import create_app
from healthchain.extensions import db


def make_app(base_dir, db_name='ledger.db'):
    return create_app('testing', overrides={
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{base_dir / db_name}",
        'UPLOAD_FOLDER': str(base_dir / 'uploads'),
        'LOG_DIR': str(base_dir / 'logs'),
    })


@pytest.fixture
def app(tmp_path):
    """Create Flask test app."""
    app = make_app(tmp_path)
    yield app
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def chain(app):
    """The app's HealthChain service, inside an app context."""
    with app.app_context():
        yield app.extensions['healthchain']


@pytest.fixture
def granted(chain):
    """pat-1 has granted doc-1."""
    chain.grant_consent('pat-1', 'doc-1')
    return chain
