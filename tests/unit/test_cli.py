"""Tests for the stereonix command line entry point."""

from unittest.mock import Mock, patch

import cv2
import numpy as np
import pytest

from src.stereonix.cli import build_parser, main


@pytest.fixture
def input_image(tmp_path):
    path = tmp_path / "photo.png"
    cv2.imwrite(str(path), np.full((10, 20, 3), 90, dtype=np.uint8))
    return path


@pytest.fixture
def depth_image(tmp_path):
    path = tmp_path / "depth.png"
    cv2.imwrite(str(path), np.tile(np.linspace(0, 255, 20, dtype=np.uint8), (10, 1)))
    return path


class TestBuildParser:
    """Test argument parsing."""

    def test_defaults(self):
        """Test defaults mirror the default settings."""
        args = build_parser().parse_args(["image.png"])

        assert args.zoom == 100.0
        assert args.depth_intensity == 25.0
        assert args.depth_gamma == 1.0
        assert args.invert_depth is False
        assert (args.side_width, args.side_height) == (960, 1080)
        assert args.input_size == 518
        assert args.output is None

    def test_save_depth_flag_before_input(self):
        """Test --save-depth takes no value, so it can precede the input image."""
        args = build_parser().parse_args(["--save-depth", "photo.jpg"])

        assert args.save_depth is True
        assert args.input_image == "photo.jpg"
        assert args.depth_output is None


class TestMain:
    """Test main entry point."""

    def test_precomputed_depth_skips_model(self, tmp_path, input_image, depth_image):
        """Test a depth map input renders without loading a model."""
        output = tmp_path / "stereo.png"

        with patch("src.stereonix.cli.create_depth_estimator") as mock_create:
            result = main([
                str(input_image), "-o", str(output), "--depth-map", str(depth_image),
                "--side-width", "16", "--side-height", "8", "--depth-intensity", "40",
            ])

        assert result == 0
        mock_create.assert_not_called()
        assert cv2.imread(str(output), cv2.IMREAD_UNCHANGED).shape == (8, 32, 4)

    def test_model_path(self, tmp_path, input_image):
        """Test the estimator is created, loaded and used."""
        estimator = Mock()
        estimator.load_model.return_value = True
        estimator.run.side_effect = lambda tensor: np.zeros((1, 16, 16), dtype=np.float32)
        output = tmp_path / "stereo.png"
        depth_out = tmp_path / "depth.png"

        with patch("src.stereonix.cli.create_depth_estimator", return_value=estimator) as mock_create:
            result = main([
                str(input_image), "-o", str(output), "--input-size", "16",
                "--side-width", "8", "--side-height", "4", "--depth-output", str(depth_out),
                "--device", "cpu",
            ])

        assert result == 0
        mock_create.assert_called_once_with("small", "cpu", False)
        estimator.run.assert_called_once()
        assert output.exists()
        assert depth_out.exists()

    def test_save_depth_without_path(self, tmp_path, input_image, depth_image):
        """Test the depth map lands next to the output when no path is given."""
        output = tmp_path / "stereo.png"

        result = main([
            str(input_image), "-o", str(output), "--depth-map", str(depth_image),
            "--side-width", "8", "--side-height", "4", "--save-depth",
        ])

        assert result == 0
        assert (tmp_path / "stereo_depth.png").exists()

    def test_missing_input_exits(self, tmp_path):
        """Test a missing input image exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.png")])

        assert exc_info.value.code == 1

    def test_missing_depth_map_exits(self, input_image, tmp_path):
        """Test a missing depth map exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main([str(input_image), "--depth-map", str(tmp_path / "none.png")])

        assert exc_info.value.code == 1

    def test_model_load_failure_exits(self, input_image, tmp_path):
        """Test a failed model load exits with status 1."""
        estimator = Mock()
        estimator.load_model.return_value = False

        with patch("src.stereonix.cli.create_depth_estimator", return_value=estimator):
            with pytest.raises(SystemExit) as exc_info:
                main([str(input_image), "-o", str(tmp_path / "out.png")])

        assert exc_info.value.code == 1

    def test_invalid_settings_exit(self, input_image, depth_image, tmp_path):
        """Test configuration errors are reported with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main([
                str(input_image), "-o", str(tmp_path / "out.png"),
                "--depth-map", str(depth_image), "--depth-gamma", "0",
            ])

        assert exc_info.value.code == 1
        assert not (tmp_path / "out.png").exists()
