import pytest
from PIL import Image

from fractal_viewer import main, parse_center


def test_headless_render_writes_png(tmp_path):
    output = tmp_path / "mandel.png"
    main(["-v", "mandel", "-i", "50", "--width", "24", "--height", "16", "-o", str(output), "-nm"])

    with Image.open(output) as image:
        assert image.size == (24, 16)
        assert image.mode == "RGBA"
        # the centre pixel is the origin
        assert image.getpixel((12, 8)) == (0, 0, 0, 255)


def test_headless_render_with_palette_and_view(tmp_path):
    output = tmp_path / "julia.png"
    main(["-r", "-0.8", "-im", "0.156", "-c", "0.1 -0.1", "-z", "2", "-p", "cosine", "--width", "10", "--height", "10",
          "-o", str(output)])
    assert output.exists()


@pytest.mark.parametrize(
    "argv",
    [
        ["--width", "0"],
        ["-i", "0"],
        ["-z", "0"],
        ["-c", "not a number"],
        ["-p", "plaid"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(tmp_path, argv):
    with pytest.raises(SystemExit) as excinfo:
        main(argv + ["-o", str(tmp_path / "never.png")])
    assert excinfo.value.code == 2
    assert not (tmp_path / "never.png").exists()


def test_parse_center():
    assert parse_center("-0.5 0") == complex(-0.5, 0)
    assert parse_center("1.5,2") == complex(1.5, 2)
    with pytest.raises(ValueError):
        parse_center("1 2 3")
