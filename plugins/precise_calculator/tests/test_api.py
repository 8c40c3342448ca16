from app import create_app


def _client():
    app = create_app("TestingConfig")
    return app.test_client()


def _evaluate(client, **payload):
    return client.post("/api/precise_calculator/evaluate", json=payload)


def test_evaluate_exact_expression():
    resp = _evaluate(_client(), expression="1/2 + 1/3")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["success"] is True
    payload = data["data"]
    assert payload["input"] == "1/2+1/3"
    assert payload["result"] == "5/6"
    assert payload["kind"] == "exact"
    assert payload["numerator"] == "5"
    assert payload["denominator"] == "6"
    assert payload["precision"] == 100
    assert payload["rounding"] == "nearest"


def test_evaluate_decimal_expression():
    payload = _evaluate(_client(), expression="2.5 * 2").get_json()["data"]
    assert payload["result"] == "5.0000000"
    assert payload["kind"] == "decimal"
    assert "numerator" not in payload


def test_evaluate_partial_expression():
    payload = _evaluate(_client(), expression="x + 2*3").get_json()["data"]
    assert payload["result"] == "x+6"
    assert payload["kind"] == "expression"


def test_display_digits_and_rounding_overrides():
    payload = _evaluate(_client(), expression="1.0/3", display_digits=3, rounding="up").get_json()["data"]
    assert payload["result"] == "0.333"
    assert payload["rounding"] == "up"


def test_division_by_zero_is_reported():
    resp = _evaluate(_client(), expression="1/0")
    assert resp.status_code == 400
    data = resp.get_json()
    assert data["success"] is False
    assert data["error"]["code"] == "calc.division_by_zero"


def test_unknown_function_is_not_implemented():
    resp = _evaluate(_client(), expression="foo(1,2)")
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "calc.not_implemented"


def test_parse_errors_carry_positions():
    resp = _evaluate(_client(), expression="2 ** 3 + 'a'")
    assert resp.status_code == 400
    error = resp.get_json()["error"]
    assert error["code"] == "calc.parse_error"
    assert [item["column"] for item in error["details"]["errors"]] == [0, 9]


def test_invalid_payload_rejected():
    client = _client()
    resp = _evaluate(client, expression="1", unexpected=True)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "calc.invalid_request"
    resp = _evaluate(client, expression="1", display_digits=0)
    assert resp.status_code == 400
    resp = client.post("/api/precise_calculator/evaluate", data="not json")
    assert resp.status_code == 400


def test_expression_length_is_limited():
    resp = _evaluate(_client(), expression="1+" * 600 + "1")
    assert resp.status_code == 400
    assert resp.get_json()["error"]["message"] == "Expression is too long"


def test_functions_endpoint_lists_registry():
    resp = _client().get("/api/precise_calculator/functions")
    assert resp.status_code == 200
    functions = resp.get_json()["data"]["functions"]
    assert {"name": "sin", "arity": 1} == {key: functions[0][key] for key in ("name", "arity")}


def test_decimal_overflow_is_reported():
    resp = _evaluate(_client(), expression="1e999999999999999999*10")
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "calc.overflow"


def test_exact_numerator_is_sent_in_full(tmp_path):
    config = tmp_path / "config.yml"
    config.write_text("plugins:\n  precise_calculator:\n    max_expression_length: 10000\n", encoding="utf-8")
    client = create_app("TestingConfig", config_path=config).test_client()
    factor = "9" * 2500
    payload = _evaluate(client, expression=f"{factor}*{factor}/2").get_json()["data"]
    assert len(payload["numerator"]) == 5000
    assert payload["denominator"] == "2"
    assert payload["result"] == payload["numerator"] + "/2"
