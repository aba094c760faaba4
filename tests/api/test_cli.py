from __future__ import annotations

from pathlib import Path

import imageio.v3 as iio
import numpy as np
import pytest

from api import build_config, render
from api.cli import build_parser, main, resolve_values


def test_parser_accepts_original_style_arguments() -> None:
    args = build_parser().parse_args(
        ["400", "300", "1,2", "32", "-c", "sawtooth", "0,0.25,0.5,51", "-f", "30", "-t", "4"]
    )
    assert (args.width, args.height, args.angles, args.scale) == (400, 300, "1,2", 32.0)
    assert args.colorizer == ["sawtooth", "0,0.25,0.5,51"]
    assert args.frames == 30 and args.threads == 4
    assert args.percent is None
    assert args.use_numba is None


def test_yaml_values_are_overridden_by_cli(tmp_path: Path) -> None:
    cfg_file = tmp_path / "qc.yaml"
    cfg_file.write_text(
        "width: 64\nheight: 48\nangles: [1, 2, 1]\nscale: 8\nframes: 5\n"
        "image-format: png\ncolorizer:\n  name: greyscale\n  params: [127]\n",
        encoding="utf-8",
    )
    args = build_parser().parse_args(["--config", str(cfg_file), "-f", "9"])
    values = resolve_values(args)
    assert values["width"] == 64
    assert values["frames"] == 9
    assert values["image_format"] == "png"
    cfg = build_config(values)
    assert cfg.angles.mode == "proportional"
    assert cfg.colorizer.params == ("127",)


def test_invalid_configuration_exits_with_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as ei:
        main(["4", "4", "0", "1", "-o", str(tmp_path)])
    assert ei.value.code == 2


def test_missing_config_file_is_a_usage_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as ei:
        main(["--config", str(tmp_path / "nope.yaml")])
    assert ei.value.code == 2


@pytest.mark.integration
def test_main_writes_png_sequence(tmp_path: Path) -> None:
    out = tmp_path / "frames"
    code = main(
        ["12", "10", "5", "4", "-f", "4", "-t", "3", "-i", "png", "-o", str(out), "-c", "greyscale", "127"]
    )
    assert code == 0
    names = sorted(p.name for p in out.iterdir())
    assert names == ["000000.png", "000001.png", "000002.png", "000003.png"]
    img = iio.imread(out / "000002.png")
    assert img.shape == (10, 12, 3)


@pytest.mark.integration
def test_main_writes_gif(tmp_path: Path) -> None:
    out = tmp_path / "anim.gif"
    code = main(["10", "10", "1-2,1", "4", "-f", "5", "-t", "2", "-i", "gif", "-o", str(out)])
    assert code == 0
    assert len(list(iio.imiter(out))) == 5


@pytest.mark.integration
def test_end_to_end_rerun_is_byte_identical(tmp_path: Path) -> None:
    values = {
        "width": 4,
        "height": 4,
        "scale": 1,
        "angles": "2",
        "frames": 1,
        "colorizer": "greyscale 127",
        "image_format": "png",
    }
    a = tmp_path / "a"
    b = tmp_path / "b"
    render(build_config({**values, "output": str(a)}))
    render(build_config({**values, "output": str(b)}))
    img_a = iio.imread(a / "000000.png")
    assert img_a.dtype == np.uint8 and img_a.shape == (4, 4, 3)
    np.testing.assert_array_equal(img_a, iio.imread(b / "000000.png"))
