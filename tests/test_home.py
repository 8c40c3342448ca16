from werkzeug.exceptions import MethodNotAllowed

from app import create_app
from common.errors import ensure_app_error


def test_home_lists_plugins():
    app = create_app("TestingConfig")
    client = app.test_client()
    response = client.get("/")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    titles = [item["title"] for item in payload["data"]["plugins"]]
    assert "Precise Calculator" in titles
    assert payload["data"]["title"] == "calq"
    assert response.headers.get("Content-Security-Policy")
    assert response.headers.get("X-Request-ID")


def test_unknown_route_returns_json_error():
    client = create_app("TestingConfig").test_client()
    response = client.get("/missing")
    assert response.status_code == 404
    assert response.get_json()["error"]["code"] == "not_found"


def test_plugin_settings_loaded_from_yaml(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text(
        "site:\n  title: bench\nplugins:\n  precise_calculator:\n    display_digits: 4\n",
        encoding="utf-8",
    )
    client = create_app("TestingConfig", config_path=config).test_client()
    assert client.get("/").get_json()["data"]["title"] == "bench"
    resp = client.post("/api/precise_calculator/evaluate", json={"expression": "2.0/3"})
    assert resp.get_json()["data"]["result"] == "0.6667"


def test_wrong_method_returns_http_error_envelope():
    client = create_app("TestingConfig").test_client()
    response = client.get("/api/precise_calculator/evaluate")
    assert response.status_code == 405
    error = response.get_json()["error"]
    assert error["code"] == "http_error"


def test_unexpected_errors_hide_their_message():
    error = ensure_app_error(RuntimeError("secret path /etc/passwd"))
    assert error.status_code == 500
    assert error.to_dict() == {"code": "internal_error", "message": "Internal server error"}
    assert ensure_app_error(MethodNotAllowed()).status_code == 405
