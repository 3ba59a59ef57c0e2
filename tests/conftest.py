import pytest

from api import create_app
from calculator import CalculatorEngine
from database import Database
from input_handler import dispatch_key


class RecordingSink:
    """Collects every render call"""

    def __init__(self):
        self.calls = []

    def render(self, *args):
        self.calls.append(args)

    @property
    def last(self):
        return self.calls[-1] if self.calls else None


@pytest.fixture
def type_keys():
    """Feed a sequence like "3+4=" to an engine the way the keyboard would"""
    def _type(engine, keys):
        for key in keys:
            dispatch_key(engine, key)
    return _type


@pytest.fixture
def engine():
    return CalculatorEngine()


@pytest.fixture
def display_sink():
    return RecordingSink()


@pytest.fixture
def history_sink():
    return RecordingSink()


@pytest.fixture
def db(tmp_path):
    return Database(str(tmp_path / "test.db"))


@pytest.fixture
def client(tmp_path):
    app = create_app(db_path=str(tmp_path / "api.db"))
    app.config['TESTING'] = True
    with app.test_client() as test_client:
        yield test_client
