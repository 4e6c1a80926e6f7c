import pytest

from termview3d.cli import Action, UsageError, main, parse_args, status_message


@pytest.mark.parametrize("argv", [[], ["-h"], ["-help"], ["--h"], ["--help"]])
def test_help_arguments(argv):
    assert parse_args(argv).action is Action.HELP


@pytest.mark.parametrize("argv", [["-v"], ["-version"], ["--v"], ["--version"]])
def test_version_arguments(argv):
    assert parse_args(argv).action is Action.VERSION


def test_path_argument():
    command = parse_args(["model.obj"])
    assert command.action is Action.VIEW
    assert command.path == "model.obj"


def test_too_many_arguments():
    with pytest.raises(UsageError, match="Please supply only one file path to visualize."):
        parse_args(["a.obj", "b.obj"])


def test_status_message_full_when_wide():
    full = status_message(False, True, 160, 92, 60.0, 1000)
    assert full.startswith("rendering: edges | display mode: braile | resolution: 160 x 92")
    assert full.endswith("fps:  60")


def test_status_message_needs_strictly_more_room():
    full = status_message(True, False, 40, 20, 30.0, 1000)
    assert status_message(True, False, 40, 20, 30.0, len(full) + 1) == full
    shorter = status_message(True, False, 40, 20, 30.0, len(full))
    assert "fps" not in shorter
    assert full.startswith(shorter)


def test_status_message_shrinks_to_rendering_mode():
    points_only = status_message(True, True, 10, 10, 1.0, len("rendering: vertices") + 1)
    assert points_only == "rendering: vertices"


def test_status_message_empty_when_too_narrow():
    assert status_message(False, False, 10, 10, 1.0, 0) == ""


def test_status_message_modes_shown():
    msg = status_message(True, False, 8, 4, 5.0, 1000)
    assert "rendering: vertices" in msg
    assert "display mode: blocks" in msg


def test_main_help(capsys):
    assert main(["--help"]) == 0
    assert "Usage" in capsys.readouterr().out


def test_main_without_arguments_shows_help(capsys):
    assert main([]) == 0
    assert "Controls" in capsys.readouterr().out


def test_main_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "0.1.1"


def test_main_too_many_arguments(capsys):
    assert main(["a.obj", "b.obj"]) == 1
    assert "Please supply only one file path" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.obj")]) == 1
    assert "missing.obj" in capsys.readouterr().err


def test_main_bad_obj(tmp_path, capsys):
    path = tmp_path / "bad.obj"
    path.write_text("v 1 2\n", encoding="utf-8")
    assert main([str(path)]) == 1
    assert "Error parsing .obj file." in capsys.readouterr().err