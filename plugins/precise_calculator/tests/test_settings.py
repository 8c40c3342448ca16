from plugins.precise_calculator.core import CalculatorSettings, PrecisionMode, RoundingMode, load_settings


def test_defaults_when_section_missing():
    settings = load_settings(None)
    assert settings == CalculatorSettings()
    assert settings.precision is PrecisionMode.DECENT
    assert settings.rounding is RoundingMode.NEAREST
    assert settings.display_digits == 8
    assert settings.max_expression_length == 1024


def test_values_are_normalised():
    settings = load_settings({"rounding": " ZERO ", "display_digits": "12", "max_expression_length": 64.0})
    assert settings.rounding is RoundingMode.ZERO
    assert settings.display_digits == 12
    assert settings.max_expression_length == 64


def test_invalid_values_fall_back():
    settings = load_settings({"precision": "extreme", "rounding": "sideways", "display_digits": "abc"})
    assert settings.precision is PrecisionMode.DECENT
    assert settings.rounding is RoundingMode.NEAREST
    assert settings.display_digits == 8


def test_display_digits_are_clamped():
    assert load_settings({"display_digits": 500}).display_digits == 50
    assert load_settings({"display_digits": 0}).display_digits == 1


def test_settings_build_a_configured_evaluator():
    evaluator = load_settings({"rounding": "up", "display_digits": 3}).evaluator()
    assert evaluator.rounding is RoundingMode.UP
    assert evaluator.context().prec == 100
    # Display rounding is always to nearest; the mode applies to arithmetic.
    assert evaluator.run("1.0/3").text == "0.333"
    assert evaluator.run("1.0/3").expr.value.value.as_tuple().digits[-1] == 4
