import json

import pytest

from config_manager import ConfigManager, config_from_dict, config_to_dict
from halftone.errors import ConfigValidationError
from models import ColorMode, IntensityCurve, PatternType, ProcessingConfig, RenderStyle


def test_round_trip(tmp_path):
    manager = ConfigManager(tmp_path / "config.json")
    config = ProcessingConfig(
        pattern_type=PatternType.STIPPLE,
        render_style=RenderStyle.STROKE,
        color_mode=ColorMode.TRITONE,
        intensity_curve=IntensityCurve.GAMMA,
        dot_size=5,
        seed=99,
        use_standard_angles=False,
        angles={"shadows": 20.0},
        colors={"shadows": "#112233"},
    )

    saved, error = manager.save(config)

    assert saved and error is None
    assert manager.load() == config


def test_enums_are_stored_as_values(tmp_path):
    manager = ConfigManager(tmp_path / "config.json")
    manager.save(ProcessingConfig(pattern_type=PatternType.WAVE))

    data = json.loads((tmp_path / "config.json").read_text())

    assert data["pattern_type"] == "wave"
    assert data["color_mode"] == "cmyk"


def test_missing_file_gives_defaults(tmp_path):
    assert ConfigManager(tmp_path / "absent.json").load() == ProcessingConfig()


@pytest.mark.parametrize("content", ["{not json", '{"pattern_type": "plaid"}', '{"dot_size": "big"}'])
def test_bad_file_gives_defaults(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content)

    assert ConfigManager(path).load() == ProcessingConfig()


def test_partial_file_keeps_other_defaults():
    config = config_from_dict({"spacing": 20})

    assert config.spacing == 20.0
    assert config.dot_size == ProcessingConfig().dot_size


def test_save_to_unwritable_location(tmp_path):
    saved, error = ConfigManager(tmp_path / "missing" / "config.json").save(ProcessingConfig())

    assert not saved
    assert error


def test_config_to_dict_is_json_serializable():
    json.dumps(config_to_dict(ProcessingConfig()))


def test_validate_accepts_defaults():
    ProcessingConfig().validate()


def test_validate_reports_every_problem():
    config = ProcessingConfig(dot_size=50, spacing=1, colors={"cyan": "blue"}, workers=0)

    with pytest.raises(ConfigValidationError) as excinfo:
        config.validate()

    assert len(excinfo.value.errors) == 4
    assert "dot_size" in str(excinfo.value)


def test_validate_rejects_unknown_enum_values():
    with pytest.raises(ConfigValidationError) as excinfo:
        ProcessingConfig(color_mode="sepia").validate()

    assert "color_mode" in excinfo.value.errors[0]


def test_non_object_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2, 3]")

    assert ConfigManager(path).load() == ProcessingConfig()
