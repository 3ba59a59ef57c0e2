import pytest

from api import create_app
from calculator import CalculatorEngine
from database import Database
from input_handler import dispatch_key
from storage_manager import StorageManager


def post(client, url, **body):
    response = client.post(url, json=body)
    return response, response.get_json()


def press(client, keys):
    for key in keys:
        post(client, '/api/key', key=key)


def test_initial_state(client):
    data = client.get('/api/state').get_json()
    assert data['success'] is True
    assert data['data']['display'] == "0"
    assert data['data']['operation'] is None


def test_api_info_lists_endpoints(client):
    data = client.get('/api').get_json()
    assert '/api/state' in data['data']['endpoints']


def test_digit_and_operation(client):
    post(client, '/api/digit', digit="3")
    response, data = post(client, '/api/operation', operation="add")
    assert response.status_code == 200
    assert data['data']['expression'] == "3 +"
    assert data['data']['first_operand'] == 3.0
    post(client, '/api/digit', digit="4")
    _, data = post(client, '/api/evaluate')
    assert data['data']['display'] == "7"
    assert data['data']['can_undo'] is True


def test_missing_or_bad_fields(client):
    response, data = post(client, '/api/digit')
    assert response.status_code == 400
    assert data['success'] is False
    response, _ = post(client, '/api/operation', operation="modulo")
    assert response.status_code == 400
    response, _ = post(client, '/api/key', key="F1")
    assert response.status_code == 400


def test_chained_keys(client):
    press(client, "3+4*2=")
    data = client.get('/api/state').get_json()
    assert data['data']['display'] == "14"


def test_divide_by_zero(client):
    press(client, "8/0=")
    data = client.get('/api/state').get_json()['data']
    assert data['display'] == "Cannot divide by zero"
    assert data['is_error'] is True
    assert client.get('/api/history').get_json()['count'] == 0


@pytest.mark.parametrize("url, start, expected", [
    ('/api/percentage', "50", "0.5"),
    ('/api/sqrt', "9", "3"),
    ('/api/backspace', "98", "9"),
    ('/api/clear', "98", "0"),
])
def test_unary_actions(client, url, start, expected):
    press(client, start)
    _, data = post(client, url)
    assert data['data']['display'] == expected


def test_undo_redo(client):
    press(client, "3+4=")
    _, data = post(client, '/api/undo')
    assert data['data']['pending_input'] == "4"
    assert data['data']['operation'] == "add"
    _, data = post(client, '/api/redo')
    assert data['data']['display'] == "7"


def test_history_recall_and_clear(client):
    press(client, "3+4=")
    press(client, ["Escape"])
    history = client.get('/api/history').get_json()
    assert history['data']['entries'] == ["3 + 4 = 7"]
    _, data = post(client, '/api/history/0/recall')
    assert data['data']['display'] == "7"
    response, _ = post(client, '/api/history/5/recall')
    assert response.status_code == 404
    response = client.delete('/api/history')
    assert response.get_json()['count'] == 0
    assert client.get('/api/history').get_json()['data']['entries'] == []


def test_history_persists_across_apps(tmp_path):
    db_path = str(tmp_path / "shared.db")
    first = create_app(db_path=db_path).test_client()
    press(first, "6*7=")
    second = create_app(db_path=db_path).test_client()
    history = second.get('/api/history').get_json()
    assert history['data']['entries'] == ["6 × 7 = 42"]


def test_theme(client):
    assert client.get('/api/theme').get_json()['data']['theme'] == "light"
    _, data = post(client, '/api/theme/toggle')
    assert data['data']['theme'] == "dark"
    _, data = post(client, '/api/theme', theme="light")
    assert data['data']['theme'] == "light"
    response, data = post(client, '/api/theme', theme="purple")
    assert response.status_code == 400
    assert data['success'] is False


def test_web_history_leaves_desktop_history_alone(tmp_path):
    db_path = str(tmp_path / "shared.db")
    desktop = CalculatorEngine()
    desktop_storage = StorageManager(Database(db_path))
    for key in "3+4=":
        dispatch_key(desktop, key)
    desktop_storage.save_history(desktop.history_snapshot())

    web = create_app(db_path=db_path).test_client()
    press(web, "1+1=")

    desktop_history = CalculatorEngine(history=desktop_storage.load_history()).history
    assert desktop_history.format_calculation_history() == ["3 + 4 = 7"]
    assert web.get('/api/history').get_json()['data']['entries'] == ["1 + 1 = 2"]


def test_engine_actions_hold_the_lock(tmp_path):
    app = create_app(db_path=str(tmp_path / "lock.db"))
    engine = app.config['ENGINE']
    lock = app.config['ENGINE_LOCK']
    seen = []
    original = engine.evaluate

    def evaluate():
        seen.append(lock.locked())
        return original()

    engine.evaluate = evaluate
    client = app.test_client()
    press(client, "2+2")
    _, data = post(client, '/api/evaluate')
    assert data['data']['display'] == "4"
    assert seen == [True]
    assert not lock.locked()
