"""Tests for output validation."""
from PIL import Image

from socialshots.validate import validate_outputs


def _save(path, size):
    Image.new("RGB", size, "white").save(path)


class TestValidateOutputs:
    """Tests for validate_outputs()."""

    def test_all_valid(self, tmp_path, capsys):
        _save(tmp_path / "favicon_16x16.png", (16, 16))
        _save(tmp_path / "apple-touch-icon.png", (180, 180))
        _save(tmp_path / "image_256x256.png", (256, 256))

        report = validate_outputs(str(tmp_path))

        assert report.valid == 3
        assert report.passed
        assert "All assets match" in capsys.readouterr().out

    def test_size_mismatch(self, tmp_path):
        _save(tmp_path / "youtube_thumbnail.png", (1280, 700))
        report = validate_outputs(str(tmp_path))
        assert not report.passed
        assert "expected 1280×720" in report.errors[0]

    def test_unknown_name_is_warning(self, tmp_path):
        _save(tmp_path / "holiday.png", (10, 10))
        report = validate_outputs(str(tmp_path))
        assert report.passed
        assert len(report.warnings) == 1

    def test_unreadable(self, tmp_path):
        (tmp_path / "twitch_banner.png").write_bytes(b"garbage")
        report = validate_outputs(str(tmp_path))
        assert "unreadable" in report.errors[0]

    def test_missing_directory(self, tmp_path):
        report = validate_outputs(str(tmp_path / "missing"))
        assert not report.passed
