"""Unit tests for settings loading."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from slidextract.infrastructure.config import ExtractionSettings, OutputSettings, Settings
from slidextract.ports.outbound.duration_probe_port import DEFAULT_PROBE_TIMEOUT


class TestExtractionSettings:

    def test_defaults(self, monkeypatch):
        for name in ("INTERVAL_SECONDS", "THRESHOLD", "WORKERS", "MAX_FRAMES", "IMAGE_FORMAT", "NORMALIZATION"):
            monkeypatch.delenv(f"SLIDEXTRACT_{name}", raising=False)
        settings = ExtractionSettings()
        assert settings.interval_seconds == 0.5
        assert settings.threshold == 1000
        assert settings.workers == 8
        assert settings.max_frames == 25
        assert settings.image_format == "bmp"
        assert settings.normalization == "pixel"
        assert settings.task_timeout is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SLIDEXTRACT_THRESHOLD", "800")
        monkeypatch.setenv("SLIDEXTRACT_IMAGE_FORMAT", "jpg")
        settings = ExtractionSettings()
        assert settings.threshold == 800
        assert settings.image_format == "jpg"

    def test_normalization_is_canonicalised(self):
        assert ExtractionSettings(normalization="RAW").normalization == "raw"

    def test_unknown_format_rejected(self):
        with pytest.raises(ValidationError):
            ExtractionSettings(image_format="gif")

    def test_unknown_normalization_rejected(self):
        with pytest.raises(ValidationError):
            ExtractionSettings(normalization="cosine")


class TestSettings:

    def test_sections_present(self, monkeypatch):
        monkeypatch.setenv("OUTPUT_ROOT", "slides")
        settings = Settings()
        assert settings.output.root == "slides"
        assert settings.ffmpeg.probe_timeout == DEFAULT_PROBE_TIMEOUT
        assert settings.logging.level

    def test_output_default(self, monkeypatch):
        monkeypatch.delenv("OUTPUT_ROOT", raising=False)
        assert OutputSettings().root == "out"
