"""Tests for model input tensor encoding."""

import numpy as np
import pytest

from src.stereonix.core.constants import IMAGENET_MEAN, IMAGENET_STD
from src.stereonix.processing.tensor import (
    decode_input_tensor,
    encode_input_tensor,
    make_model_input,
)


@pytest.fixture
def square_image():
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, size=(6, 6, 4), dtype=np.uint8)


class TestEncodeInputTensor:
    """Test encode_input_tensor function."""

    def test_planar_layout(self, square_image):
        """Test output is (3, N, N) float32."""
        tensor = encode_input_tensor(square_image)

        assert tensor.shape == (3, 6, 6)
        assert tensor.dtype == np.float32
        assert tensor.flags["C_CONTIGUOUS"]

    def test_imagenet_normalization(self):
        """Test each channel uses its own mean and std."""
        image = np.zeros((1, 1, 4), dtype=np.uint8)
        image[0, 0] = (255, 0, 128, 255)

        tensor = encode_input_tensor(image)

        expected_r = (1.0 - IMAGENET_MEAN[0]) / IMAGENET_STD[0]
        expected_g = (0.0 - IMAGENET_MEAN[1]) / IMAGENET_STD[1]
        expected_b = (128 / 255 - IMAGENET_MEAN[2]) / IMAGENET_STD[2]
        assert tensor[0, 0, 0] == pytest.approx(expected_r, rel=1e-5)
        assert tensor[1, 0, 0] == pytest.approx(expected_g, rel=1e-5)
        assert tensor[2, 0, 0] == pytest.approx(expected_b, rel=1e-5)

    def test_alpha_is_ignored(self, square_image):
        """Test alpha channel does not affect the tensor."""
        transparent = square_image.copy()
        transparent[..., 3] = 0

        np.testing.assert_array_equal(
            encode_input_tensor(square_image), encode_input_tensor(transparent)
        )

    def test_channel_order_is_rgb(self):
        """Test planes are ordered R, G, B."""
        image = np.zeros((2, 2, 4), dtype=np.uint8)
        image[..., 0] = 255

        tensor = encode_input_tensor(image)

        assert tensor[0].min() > 2.0
        assert tensor[1].max() < 0.0
        assert tensor[2].max() < 0.0

    def test_pixel_position_preserved(self):
        """Test row and column map to tensor row and column."""
        image = np.zeros((3, 4, 4), dtype=np.uint8)
        image[1, 2, 1] = 255

        tensor = encode_input_tensor(image)

        green = tensor[1]
        assert np.unravel_index(np.argmax(green), green.shape) == (1, 2)

    def test_rounded_to_float32_once(self):
        """Test values equal the double-precision result stored as float32."""
        values = np.arange(256, dtype=np.uint8)
        image = np.stack([values, values[::-1], values, np.full(256, 255, np.uint8)], axis=-1)[np.newaxis]

        tensor = encode_input_tensor(image)

        for channel in range(3):
            scale = 1.0 / (255.0 * IMAGENET_STD[channel])
            mean_norm = IMAGENET_MEAN[channel] / IMAGENET_STD[channel]
            expected = [float(p) * scale - mean_norm for p in image[0, :, channel]]
            np.testing.assert_array_equal(tensor[channel, 0], np.array(expected, dtype=np.float32))


class TestMakeModelInput:
    """Test make_model_input function."""

    def test_adds_batch_axis(self, square_image):
        """Test model input is (1, 3, N, N)."""
        batch = make_model_input(square_image)

        assert batch.shape == (1, 3, 6, 6)
        np.testing.assert_array_equal(batch[0], encode_input_tensor(square_image))


class TestDecodeInputTensor:
    """Test decode_input_tensor function."""

    def test_recovers_scaled_pixels(self, square_image):
        """Test decoding returns pixel / 255."""
        decoded = decode_input_tensor(encode_input_tensor(square_image))

        expected = square_image[..., :3].astype(np.float32) / 255.0
        np.testing.assert_allclose(decoded, expected, atol=1e-5)

    def test_accepts_batched_tensor(self, square_image):
        """Test batched input is decoded the same way."""
        np.testing.assert_allclose(
            decode_input_tensor(make_model_input(square_image)),
            decode_input_tensor(encode_input_tensor(square_image)),
        )
