import json

import pytest

import app
from models import ColorMode, PatternType, ProcessingConfig


@pytest.fixture
def image_path(tmp_path, gradient_image):
    path = tmp_path / "ramp.png"
    gradient_image.save(path)
    return path


def test_list_patterns(capsys):
    assert app.main(["--list-patterns"]) == 0

    output = capsys.readouterr().out
    assert "flowfield" in output
    assert "Riso" in output


def test_missing_input():
    assert app.main(["-q"]) == 1


def test_monochrome_job_writes_outputs(tmp_path, image_path):
    out_dir = tmp_path / "out"
    config_path = tmp_path / "config.json"

    code = app.main(
        [
            str(image_path),
            "-o",
            str(out_dir),
            "--mode",
            "monochrome",
            "--pattern",
            "square",
            "--hpgl",
            "--config",
            str(config_path),
            "-q",
        ]
    )

    assert code == 0
    for name in ("ramp-key.svg", "ramp-key.png", "ramp-key.hpgl", "ramp-combined.svg", "ramp-preview.png"):
        assert (out_dir / name).exists()
    assert (out_dir / "ramp-key.hpgl").read_text().startswith("IN;SP1;")
    assert not config_path.exists()


def test_save_config(tmp_path, image_path):
    config_path = tmp_path / "config.json"

    code = app.main(
        [str(image_path), "-o", str(tmp_path), "--spacing", "20", "--config", str(config_path), "--save-config", "-q"]
    )

    assert code == 0
    assert json.loads(config_path.read_text())["spacing"] == 20.0


def test_invalid_settings_fail(tmp_path, image_path):
    code = app.main(
        [str(image_path), "-o", str(tmp_path), "--dot-size", "50", "--config", str(tmp_path / "c.json"), "-q"]
    )

    assert code == 1
    assert not (tmp_path / "ramp-cyan.svg").exists()


def test_unreadable_input(tmp_path):
    broken = tmp_path / "broken.png"
    broken.write_text("nope")

    assert app.main([str(broken), "-o", str(tmp_path), "--config", str(tmp_path / "c.json"), "-q"]) == 1


def test_apply_arguments():
    args = app.build_parser().parse_args(
        [
            "in.png",
            "--pattern",
            "hexagonal",
            "--mode",
            "duotone",
            "--seed",
            "7",
            "--angle",
            "tone1=30",
            "--color",
            "tone2=#abcdef",
        ]
    )

    config = app.apply_arguments(ProcessingConfig(), args)

    assert config.pattern_type is PatternType.HEXAGONAL
    assert config.color_mode is ColorMode.DUOTONE
    assert config.seed == 7
    assert not config.use_standard_angles
    assert config.angle_for("tone1") == 30.0
    assert config.color_for("tone2") == "#abcdef"


def test_palette_option():
    args = app.build_parser().parse_args(["in.png", "--palette", "Riso"])

    config = app.apply_arguments(ProcessingConfig(), args)

    assert config.colors["cyan"] == "#ff4c65"


def test_malformed_pair():
    args = app.build_parser().parse_args(["in.png", "--color", "cyan"])

    with pytest.raises(ValueError):
        app.apply_arguments(ProcessingConfig(), args)


def test_named_palette_needs_cmyk_mode(tmp_path, image_path):
    args = app.build_parser().parse_args(["in.png", "--mode", "duotone", "--palette", "Riso"])

    with pytest.raises(ValueError):
        app.apply_arguments(ProcessingConfig(), args)

    code = app.main(
        [
            str(image_path),
            "-o",
            str(tmp_path / "out"),
            "--mode",
            "duotone",
            "--palette",
            "Riso",
            "--config",
            str(tmp_path / "c.json"),
            "-q",
        ]
    )
    assert code == 1
    assert not (tmp_path / "out").exists()


def test_random_palette_for_duotone():
    args = app.build_parser().parse_args(["in.png", "--mode", "duotone", "--palette", "random"])

    config = app.apply_arguments(ProcessingConfig(), args)

    assert list(config.colors) == ["tone1", "tone2"]
