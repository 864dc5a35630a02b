import pytest

from simpletons.body.joint import JointKind
from simpletons.config.settings import SimulationSettings, load_settings
from simpletons.exceptions import ValidationError
from simpletons.utils.logger_setup import setup_logger, setup_logger_from_settings


def test_defaults_without_sources():
    settings = load_settings()
    assert settings == SimulationSettings()
    assert settings.growth.max_depth == 3
    assert settings.mutation.rate == pytest.approx(0.1)
    assert settings.growth.joint_kinds == [JointKind.FIXED, JointKind.ROTATIONAL]


def test_yaml_then_overrides(tmp_path):
    path = tmp_path / "sim.yaml"
    path.write_text(
        "population_size: 8\n"
        "seed: 4\n"
        "growth:\n"
        "  max_depth: 5\n"
        "  joint_kinds: [fixed]\n"
        "mutation:\n"
        "  rate: 0.3\n"
    )
    settings = load_settings(path, ["growth.max_depth=2", "mutation.max_offset=0.05"])
    assert settings.population_size == 8
    assert settings.seed == 4
    assert settings.growth.max_depth == 2
    assert settings.growth.joint_kinds == [JointKind.FIXED]
    assert settings.mutation.rate == pytest.approx(0.3)
    assert settings.mutation.max_offset == pytest.approx(0.05)
    # untouched keys keep their defaults
    assert settings.growth.max_children == 3


def test_invalid_values_raise_project_error():
    with pytest.raises(ValidationError):
        load_settings(overrides=["mutation.rate=3.0"])
    with pytest.raises(ValidationError):
        load_settings(overrides=["growth.joint_kinds=[ground]"])


def test_misspelled_keys_are_rejected(tmp_path):
    with pytest.raises(ValidationError):
        load_settings(overrides=["growth.max_detph=1"])
    with pytest.raises(ValidationError):
        load_settings(overrides=["populaton_size=4"])

    path = tmp_path / "typo.yaml"
    path.write_text("mutation:\n  rat: 0.5\n")
    with pytest.raises(ValidationError):
        load_settings(path)


def test_models_forbid_unknown_fields():
    with pytest.raises(ValueError):
        SimulationSettings.model_validate({"growth": {"max_detph": 1}})


def test_missing_file_raises_project_error(tmp_path):
    with pytest.raises(ValidationError):
        load_settings(tmp_path / "missing.yaml")


def test_setup_logger_file_sink(tmp_path):
    log_file = setup_logger(log_dir=str(tmp_path / "logs"), level="DEBUG", enable_colors=False)
    assert log_file is not None
    assert log_file.startswith(str(tmp_path / "logs"))
    assert setup_logger(level="WARNING") is None


def test_setup_logger_from_loaded_settings(tmp_path):
    settings = load_settings(overrides=[f"logging.log_dir={tmp_path}", "logging.level=DEBUG"])
    assert settings.logging.log_dir == str(tmp_path)
    log_file = setup_logger_from_settings(settings.logging)
    assert log_file is not None
    assert log_file.endswith(".log")
