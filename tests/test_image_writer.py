import numpy as np
import pytest
from PIL import Image

from terrain_generator import image_writer


@pytest.fixture
def colors():
    # 2 rows x 3 columns
    return np.array([
        [[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [0.2, 0.4, 0.6]],
        [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]],
    ])


def test_write_ppm_plain_text_layout(tmp_path, colors):
    path = tmp_path / "map.ppm"

    image_writer.write_ppm(str(path), colors)

    lines = path.read_text().splitlines()
    assert lines[0] == "P3"
    assert lines[1] == "3 2"
    assert lines[2] == "255"
    assert lines[3:] == [
        "0 0 0", "255 255 255", "51 102 153",
        "255 0 0", "0 255 0", "0 0 255",
    ]


def test_save_image_uses_pillow_for_other_formats(tmp_path, colors):
    path = tmp_path / "nested" / "map.png"

    written = image_writer.save_image(str(path), colors)

    with Image.open(written) as img:
        assert img.size == (3, 2)
        assert img.getpixel((2, 0)) == (51, 102, 153)


def test_save_image_dispatches_ppm_extension(tmp_path, colors):
    path = tmp_path / "MAP.PPM"
    image_writer.save_image(str(path), colors)
    assert path.read_text().startswith("P3\n3 2\n255\n")


def test_writer_rejects_wrong_shape(tmp_path):
    with pytest.raises(ValueError):
        image_writer.write_ppm(str(tmp_path / "bad.ppm"), np.zeros((2, 2)))


def test_writer_rejects_unclamped_colors(tmp_path):
    with pytest.raises(ValueError):
        image_writer.write_ppm(str(tmp_path / "bad.ppm"), np.full((1, 1, 3), 1.5))
