import pytest

from app import app as flask_app


@pytest.fixture
def client():
    return flask_app.test_client()


@pytest.fixture
def sample_matrix():
    return [
        [0, 10, 15, 20],
        [10, 0, 35, 25],
        [15, 35, 0, 30],
        [20, 25, 30, 0],
    ]
