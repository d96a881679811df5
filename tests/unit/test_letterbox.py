"""Tests for letterboxing into the square model input."""

import numpy as np
import pytest

from src.stereonix.core.exceptions import EmptyImage, InvalidConfiguration
from src.stereonix.processing.letterbox import compute_letterbox_geometry, letterbox_image


def _solid(width, height, rgba):
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[...] = rgba
    return image


class TestComputeLetterboxGeometry:
    """Test compute_letterbox_geometry function."""

    def test_wide_image(self):
        """Test landscape image is padded top and bottom."""
        assert compute_letterbox_geometry(1000, 500, 518) == (518, 259, 0, 129)

    def test_tall_image(self):
        """Test portrait image is padded left and right."""
        assert compute_letterbox_geometry(300, 600, 518) == (259, 518, 129, 0)

    def test_square_image_has_no_padding(self):
        """Test W == H fills the whole canvas."""
        assert compute_letterbox_geometry(64, 64, 518) == (518, 518, 0, 0)

    def test_rounds_half_up(self):
        """Test content size rounds .5 upward."""
        # scale 0.5: 8 -> 4, 3 -> 1.5 -> 2
        assert compute_letterbox_geometry(8, 3, 4) == (4, 2, 0, 1)

    def test_degenerate_axis_never_zero(self):
        """Test a 1-pixel axis does not collapse to zero after scaling."""
        content_width, content_height, offset_x, _ = compute_letterbox_geometry(1, 2000, 518)
        assert content_width == 1
        assert content_height == 518
        assert offset_x == 258

    @pytest.mark.parametrize(
        "width,height",
        [(1920, 1080), (1080, 1920), (640, 480), (37, 1001), (518, 518), (3, 2)],
    )
    def test_content_fits_and_preserves_aspect(self, width, height):
        """Test content stays inside the canvas with the source aspect ratio."""
        target = 518
        content_width, content_height, offset_x, offset_y = compute_letterbox_geometry(
            width, height, target
        )

        assert offset_x + content_width <= target
        assert offset_y + content_height <= target
        # Rounding moves each side by at most half a pixel
        assert abs(content_width * height - content_height * width) <= 0.5 * (width + height)

    def test_zero_size_image_raises(self):
        """Test empty images are rejected."""
        with pytest.raises(EmptyImage):
            compute_letterbox_geometry(0, 10, 518)

    def test_non_positive_target_raises(self):
        """Test target size must be positive."""
        with pytest.raises(InvalidConfiguration):
            compute_letterbox_geometry(10, 10, 0)


class TestLetterboxImage:
    """Test letterbox_image function."""

    def test_content_placed_between_black_bars(self):
        """Test uniform content lands in the centered rectangle."""
        image = _solid(40, 20, (200, 10, 50, 255))

        result = letterbox_image(image, target_size=10)

        assert result.square_image.shape == (10, 10, 4)
        assert result.target_size == 10
        assert (result.content_width, result.content_height) == (10, 5)
        assert (result.offset_x, result.offset_y) == (0, 2)

        content = result.square_image[2:7]
        assert np.all(content[..., :3] == (200, 10, 50))
        assert np.all(result.square_image[:2, :, :3] == 0)
        assert np.all(result.square_image[7:, :, :3] == 0)
        assert np.all(result.square_image[..., 3] == 255)

    def test_transparent_pixels_become_black(self):
        """Test content is composited over the black canvas."""
        image = _solid(8, 8, (255, 255, 255, 0))

        result = letterbox_image(image, target_size=8)

        assert np.all(result.square_image[..., :3] == 0)

    def test_upscales_small_images(self):
        """Test images smaller than the target are enlarged."""
        image = _solid(2, 1, (9, 9, 9, 255))

        result = letterbox_image(image, target_size=8)

        assert (result.content_width, result.content_height) == (8, 4)
        assert np.all(result.square_image[2:6, :, :3] == 9)

    def test_does_not_modify_input(self):
        """Test source image is read-only to the letterboxer."""
        image = _solid(6, 4, (1, 2, 3, 128))
        original = image.copy()

        letterbox_image(image, target_size=5)

        np.testing.assert_array_equal(image, original)

    def test_empty_image_raises(self):
        """Test zero-height image raises EmptyImage."""
        with pytest.raises(EmptyImage):
            letterbox_image(np.zeros((0, 5, 4), dtype=np.uint8), target_size=8)
