import pytest

from tests.helpers import make_settings


@pytest.fixture
def settings():
    return make_settings()
