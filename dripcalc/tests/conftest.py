import pytest
from flask.testing import FlaskClient

from dripcalc.app import create_app
from dripcalc.config import Settings


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(Settings())
    app.config.update(TESTING=True)
    with app.test_client() as test_client:
        yield test_client
