"""
Tests for the pixelflow command line driver.
"""

import argparse

import pytest

from pixelflow.config import get_settings
from pixelflow.enums import BlurEdgeMode, FlipAxis
from pixelflow.image.io import load_image, save_image
from pixelflow.main import EXIT_IO_ERROR, EXIT_OK, apply_overrides, build_parser, main


class TestParser:
    """Tests for argument parsing."""

    def test_run_arguments(self):
        """Test run subcommand options."""
        args = build_parser().parse_args(
            ["run", "in.bmp", "out.bmp", "-r", "3", "-a", "vertical", "--no-grayscale"]
        )

        assert args.command == "run"
        assert args.input == "in.bmp"
        assert args.radius == 3
        assert args.axis == "vertical"
        assert args.no_grayscale is True

    def test_command_required(self):
        """Test a subcommand must be given."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_invalid_axis(self):
        """Test unknown axis is rejected by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["run", "a.bmp", "b.bmp", "--axis", "diagonal"])


class TestApplyOverrides:
    """Tests for command line overrides of settings."""

    def test_overrides_applied(self, settings):
        """Test flags replace config values."""
        args = build_parser().parse_args(
            [
                "-l",
                "DEBUG",
                "run",
                "a.bmp",
                "b.bmp",
                "--radius",
                "4",
                "--edge-mode",
                "full_window",
                "--axis",
                "vertical",
                "--no-blur",
                "--preserve-alpha",
            ]
        )

        result = apply_overrides(settings, args)

        assert result.blur.radius == 4
        assert result.blur.edge_mode == BlurEdgeMode.FULL_WINDOW
        assert result.blur.enabled is False
        assert result.grayscale.preserve_alpha is True
        assert result.flip.axis == FlipAxis.VERTICAL
        assert result.system.log_level == "DEBUG"

    def test_original_untouched(self, settings):
        """Test the source settings are not mutated."""
        args = build_parser().parse_args(["run", "a.bmp", "b.bmp", "--radius", "6"])

        apply_overrides(settings, args)

        assert settings.blur.radius == 2

    def test_radius_out_of_range(self, settings):
        """Test radius outside the allowed range fails."""
        args = argparse.Namespace(radius=100, log_level=None)

        with pytest.raises(ValueError):
            apply_overrides(settings, args)


class TestMain:
    """Tests for the main entry point."""

    def test_run_success(self, tmp_path, settings, quad_buffer):
        """Test a successful run writes the output and exits 0."""
        src = tmp_path / "in.png"
        dst = tmp_path / "out.png"
        save_image(quad_buffer, src)

        code = main(["run", str(src), str(dst), "--radius", "1", "--no-flip"])

        assert code == EXIT_OK
        out = load_image(dst)
        assert (out.width, out.height) == (2, 2)
        assert (out.pixels[..., 3] == 255).all()

    def test_missing_input(self, tmp_path, settings):
        """Test load failures exit with an I/O error code."""
        code = main(["run", str(tmp_path / "missing.bmp"), str(tmp_path / "out.bmp")])

        assert code == EXIT_IO_ERROR

    def test_unwritable_output(self, tmp_path, settings, quad_buffer):
        """Test write failures exit with an I/O error code."""
        src = tmp_path / "in.png"
        save_image(quad_buffer, src)

        code = main(["run", str(src), str(tmp_path / "out.jpg")])

        assert code == EXIT_IO_ERROR

    def test_bad_radius_exits(self, tmp_path, settings):
        """Test an out-of-range radius is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "a.png", "b.png", "--radius", "100"])

        assert exc_info.value.code == 2

    def test_missing_config_file_exits(self, tmp_path, settings):
        """Test a missing -c file is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(tmp_path / "absent.yaml"), "run", "a.png", "b.png"])

        assert exc_info.value.code == 2

    def test_invalid_env_setting_exits(self, tmp_path, settings, monkeypatch):
        """Test an out-of-range PF_* value is a usage error, not a traceback."""
        monkeypatch.setenv("PF_BLUR_RADIUS", "999")
        get_settings.cache_clear()

        try:
            with pytest.raises(SystemExit) as exc_info:
                main(["run", "a.png", "b.png"])
        finally:
            get_settings.cache_clear()

        assert exc_info.value.code == 2

    def test_malformed_config_file_exits(self, tmp_path, settings):
        """Test a malformed -c file is a usage error."""
        config = tmp_path / "bad.yaml"
        config.write_text("- 1\n- 2\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["-c", str(config), "run", "a.png", "b.png"])

        assert exc_info.value.code == 2

    def test_config_file(self, tmp_path, settings, quad_buffer):
        """Test -c loads a YAML config file."""
        config = tmp_path / "pf.yaml"
        config.write_text("grayscale:\n  enabled: false\nblur:\n  enabled: false\n")
        src = tmp_path / "in.png"
        dst = tmp_path / "out.png"
        save_image(quad_buffer, src)

        code = main(["-c", str(config), "run", str(src), str(dst)])

        assert code == EXIT_OK
        out = load_image(dst)
        # Only the horizontal flip was applied
        assert out.get(0, 0) == quad_buffer.get(1, 0)
