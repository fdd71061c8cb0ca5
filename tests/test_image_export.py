"""
Unit tests for image_export module.
"""

import pytest
from PIL import Image

from WR_Libs.InpaintingLib.image_export import (
    build_export_filename,
    export_image,
    normalize_export_format,
)
from WR_Libs.InpaintingLib.inpaint_models import ConfigError


@pytest.fixture
def rgba_image():
    return Image.new("RGBA", (16, 12), (200, 100, 50, 128))


class TestFormats:
    """Tests for format names and default filenames."""

    @pytest.mark.parametrize("name,expected", [
        ("png", "png"),
        ("PNG", "png"),
        ("jpg", "jpeg"),
        (".jpeg", "jpeg"),
        ("WebP", "webp"),
    ])
    def test_normalize(self, name, expected):
        assert normalize_export_format(name) == expected

    def test_unknown_format(self):
        with pytest.raises(ConfigError):
            normalize_export_format("gif")

    @pytest.mark.parametrize("name,filename", [
        ("png", "watermark-removed.png"),
        ("jpeg", "watermark-removed.jpeg"),
        ("webp", "watermark-removed.webp"),
    ])
    def test_default_filename(self, name, filename):
        assert build_export_filename(name) == filename


class TestExportImage:
    """Tests for export_image function."""

    def test_png_keeps_alpha(self, tmp_path, rgba_image):
        saved = export_image(rgba_image, tmp_path / "out.png")

        with Image.open(saved) as reloaded:
            assert reloaded.format == "PNG"
            assert reloaded.mode == "RGBA"
            assert reloaded.getpixel((0, 0)) == (200, 100, 50, 128)

    def test_jpeg_flattens_to_rgb(self, tmp_path, rgba_image):
        saved = export_image(rgba_image, tmp_path / "out.jpg", "jpeg", quality=80)

        with Image.open(saved) as reloaded:
            assert reloaded.format == "JPEG"
            assert reloaded.mode == "RGB"
            assert reloaded.size == (16, 12)

    def test_directory_uses_default_name(self, tmp_path, rgba_image):
        saved = export_image(rgba_image, tmp_path, "webp", quality=70)

        assert saved == tmp_path / "watermark-removed.webp"
        assert saved.exists()

    def test_does_not_modify_input(self, tmp_path, rgba_image):
        export_image(rgba_image, tmp_path / "x.jpeg", "jpeg")

        assert rgba_image.mode == "RGBA"

    @pytest.mark.parametrize("quality", [0, 101, -5])
    def test_invalid_quality(self, tmp_path, rgba_image, quality):
        with pytest.raises(ConfigError):
            export_image(rgba_image, tmp_path / "out.webp", "webp", quality=quality)

    def test_missing_directory(self, tmp_path, rgba_image):
        with pytest.raises(OSError, match="does not exist"):
            export_image(rgba_image, tmp_path / "missing" / "out.png")

    def test_rejects_non_image(self, tmp_path):
        with pytest.raises(TypeError):
            export_image(object(), tmp_path / "out.png")
