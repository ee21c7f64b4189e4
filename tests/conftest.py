import django
import pytest

from owsclient import conf
from owsclient.transport import HttpServiceCaller
from tests.requests import FakeSession


def pytest_configure():
    print(f"Running with Django {django.__version__}")
    print(f"Using OWSCLIENT_CSW_VERSION={conf.OWSCLIENT_CSW_VERSION}")


@pytest.fixture()
def session():
    """A session that records the requests, and replies with an empty catalogue."""
    return FakeSession()


@pytest.fixture()
def http_service_caller(session):
    return HttpServiceCaller(session=session)
