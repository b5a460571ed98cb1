"""Tests for the example configuration check."""

from pathlib import Path

from verify_config import verify_config_structure

ROOT = Path(__file__).parent.parent


def test_example_config_is_valid(capsys):
    """Test that the shipped example configuration validates."""
    assert verify_config_structure(ROOT / "config.example.yaml") is True

    out = capsys.readouterr().out
    assert "is valid" in out
    assert "Bulk write limit: unlimited" in out


def test_missing_file(tmp_path, capsys):
    assert verify_config_structure(tmp_path / "config.example.yaml") is False
    assert "not found" in capsys.readouterr().out
