import os

import pytest
from PIL import Image

from conftest import BLACK, WHITE
from spheremap_tool.__main__ import main, parse_args, prepare_argv
from spheremap_tool.cubemap import CubeFace, face_path
from spheremap_tool.errors import UsageError


def test_defaults():
    args = parse_args(["sky", "png"])

    assert args.input_prefix == "sky"
    assert args.input_extension == "png"
    assert args.samples == 1
    assert args.size == 1024
    assert args.output == "sky_spheremap.bmp"


def test_options_before_and_after_positionals():
    args = parse_args(["-aa", "5", "sky", "-size", "256", "png", "-o", "out.bmp"])

    assert (args.samples, args.size, args.output) == (5, 256, "out.bmp")
    assert (args.input_prefix, args.input_extension) == ("sky", "png")


def test_dash_marks_remaining_arguments_positional():
    args = parse_args(["-size", "8", "-", "-sky", "-png"])

    assert (args.input_prefix, args.input_extension) == ("-sky", "-png")
    assert args.size == 8


def test_dash_as_option_value_is_not_the_marker():
    assert prepare_argv(["-o", "-", "sky", "png"]) == ["-o=-", "sky", "png"]
    assert parse_args(["-o", "-", "sky", "png"]).output == "-"


def test_only_first_dash_is_the_marker():
    assert prepare_argv(["-", "-", "png"]) == ["--", "-", "png"]


@pytest.mark.parametrize("value", ["-out.bmp", "-size", "-", "a=b.bmp"])
def test_output_value_may_look_like_an_option(value):
    args = parse_args(["-o", value, "sky", "png"])

    assert args.output == value
    assert (args.input_prefix, args.input_extension) == ("sky", "png")


def test_empty_output_falls_back_to_default():
    assert parse_args(["-o", "", "sky", "png"]).output == "sky_spheremap.bmp"


@pytest.mark.parametrize(
    "argv, message",
    [
        (["-aa", "3", "sky", "png"], "Invalid AA sample pattern"),
        (["-aa", "five", "sky", "png"], "invalid int value"),
        (["-size", "big", "sky", "png"], "invalid int value"),
        (["-size", "0", "sky", "png"], "positive integer"),
        (["-size", "-4", "sky", "png"], "positive integer"),
        (["-wat", "sky", "png"], "-wat"),
        (["sky"], "required"),
        (["sky", "png", "extra"], "extra"),
        (["--", "sky", "png"], "Unknown option --"),
        (["-size=7", "sky", "png"], "Unknown option -size=7"),
        (["-aa=5", "sky", "png"], "Unknown option -aa=5"),
        (["-o=out.bmp", "sky", "png"], "Unknown option -o=out.bmp"),
        (["sky", "png", "-size"], "expected one argument"),
        (["-size", "-", "sky", "png"], "invalid int value"),
    ],
)
def test_usage_errors(argv, message):
    with pytest.raises(UsageError, match=message):
        parse_args(argv)


def test_usage_error_exits_one(capsys):
    assert main(["-aa", "4", "sky", "png"]) == 1

    err = capsys.readouterr().err
    assert "Invalid AA sample pattern. Try -help." in err
    assert "usage: SpheremapTool" in err


@pytest.mark.parametrize("flag", ["-h", "-help"])
def test_help_exits_zero(flag, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([flag])

    assert excinfo.value.code == 0
    out = capsys.readouterr().out
    assert "-aa 1|5" in out
    assert "-size <int>" in out
    assert "(Default: 1024)" in out


def test_convert_from_command_line(face_files, tmp_path):
    out = str(tmp_path / "result.bmp")

    assert main(["-aa", "5", "-size", "5", "-o", out, face_files, "png"]) == 0

    with Image.open(out) as img:
        assert img.size == (5, 5)
        rgb = img.convert("RGB")
        assert rgb.getpixel((2, 2)) == WHITE
        assert rgb.getpixel((0, 0)) == BLACK


def test_default_output_next_to_inputs(face_files):
    assert main(["-size", "3", face_files, "png"]) == 0

    assert os.path.isfile(face_files + "_spheremap.bmp")


def test_missing_face_fails_before_writing(face_files, capsys):
    os.remove(face_path(face_files, "png", CubeFace.NEG_X))

    assert main(["-size", "4", face_files, "png"]) == 1

    err = capsys.readouterr().err
    assert err.startswith("Could not load -X face (_left)")
    assert not os.path.exists(face_files + "_spheremap.bmp")


def test_empty_output_writes_default_file(face_files):
    assert main(["-size", "3", "-o", "", face_files, "png"]) == 0

    assert os.path.isfile(face_files + "_spheremap.bmp")
