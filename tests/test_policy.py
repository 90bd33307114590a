import pytest

from rides.insertion.policy import (
    DEFAULT_AVERAGE_SPEED_KMH,
    RouteEvaluationOptions,
    default_options,
    options_from_env,
    relaxed_options,
    strict_options,
)


def test_factories_return_valid_options():
    for factory in (default_options, strict_options, relaxed_options):
        factory().validate()


def test_default_options():
    options = default_options()
    assert options.average_speed_kmh == DEFAULT_AVERAGE_SPEED_KMH == 30
    assert options.max_additional_minutes == 5
    assert options.max_deviation_meters is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_additional_minutes": -1, "max_deviation_meters": 100},
        {"max_additional_minutes": 5, "max_deviation_meters": -100},
        {"max_additional_minutes": 5, "max_deviation_meters": 100, "average_speed_kmh": 0},
    ],
)
def test_validate_rejects_bad_thresholds(kwargs):
    with pytest.raises(ValueError):
        RouteEvaluationOptions(**kwargs).validate()


def test_options_from_env(monkeypatch):
    monkeypatch.setenv("MATCHING_AVERAGE_SPEED_KMH", "45")
    monkeypatch.setenv("MATCHING_MAX_ADDITIONAL_MINUTES", "12.5")
    monkeypatch.setenv("MATCHING_MAX_DEVIATION_METERS", "1500")

    options = options_from_env()

    assert options.average_speed_kmh == 45
    assert options.max_additional_minutes == 12.5
    assert options.max_deviation_meters == 1500


def test_options_from_env_defaults(monkeypatch):
    for name in ("MATCHING_AVERAGE_SPEED_KMH", "MATCHING_MAX_ADDITIONAL_MINUTES", "MATCHING_MAX_DEVIATION_METERS"):
        monkeypatch.delenv(name, raising=False)

    assert options_from_env() == default_options()


def test_options_from_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("MATCHING_MAX_ADDITIONAL_MINUTES", "five")
    with pytest.raises(ValueError, match="MATCHING_MAX_ADDITIONAL_MINUTES"):
        options_from_env()


def test_dotenv_is_loaded_only_when_reading_env(monkeypatch):
    import rides.insertion.policy as policy

    calls = []
    monkeypatch.setattr(policy, "load_dotenv", lambda *args, **kwargs: calls.append(1) or False)

    # building options by hand never touches the environment
    default_options()
    assert calls == []

    options_from_env()
    assert calls == [1]
