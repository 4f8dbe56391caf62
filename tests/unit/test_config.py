"""Tests for settings defaults and env overrides."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from fce_synthesis.core.config import (
    AppSettings,
    AssemblyConfig,
    CrosscheckConfig,
    PDFFormattingConfig,
    ProfileConfig,
    RenderServiceConfig,
    StoreConfig,
)


class TestDefaults:
    def test_store(self) -> None:
        cfg = StoreConfig()
        assert cfg.backend == "file"
        assert cfg.store_path == Path("./records")
        assert cfg.s3_prefix == "records/"

    def test_profile_disabled(self) -> None:
        assert ProfileConfig().enabled is False

    def test_assembly_timeline(self) -> None:
        cfg = AssemblyConfig()
        assert (cfg.interview_minutes, cfg.overview_minutes, cfg.minutes_per_test) == (45, 5, 5)

    def test_crosscheck_thresholds(self) -> None:
        cfg = CrosscheckConfig()
        assert cfg.cv_threshold == 15.0
        assert cfg.rapid_exchange_ratio == 0.85
        assert cfg.mve_max_deficiency == 20.0
        assert cfg.rom_min_values == 6

    def test_render_service(self) -> None:
        cfg = RenderServiceConfig()
        assert cfg.endpoint == "/generate-executive-summary"
        assert cfg.api_key == ""

    def test_pdf(self) -> None:
        cfg = PDFFormattingConfig()
        assert cfg.page_size == "letter"
        assert cfg.include_cover_page is True

    def test_app_settings_aggregates(self) -> None:
        settings = AppSettings()
        assert isinstance(settings.crosscheck, CrosscheckConfig)
        assert settings.observability.service_name == "fce-synthesis"


class TestEnvOverrides:
    def test_store_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FCE_STORE_BACKEND", "s3")
        monkeypatch.setenv("FCE_STORE_S3_BUCKET", "fce-records")
        cfg = StoreConfig()
        assert cfg.backend == "s3"
        assert cfg.s3_bucket == "fce-records"

    def test_cv_threshold(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FCE_CROSSCHECK_CV_THRESHOLD", "12.5")
        assert CrosscheckConfig().cv_threshold == 12.5

    def test_pdf_flags(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FCE_PDF_PAGE_SIZE", "a4")
        monkeypatch.setenv("FCE_PDF_INCLUDE_APPENDIX", "false")
        cfg = PDFFormattingConfig()
        assert cfg.page_size == "a4"
        assert cfg.include_appendix is False


class TestValidation:
    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(backend="ftp")

    def test_cv_threshold_bounds(self) -> None:
        with pytest.raises(ValidationError):
            CrosscheckConfig(cv_threshold=0)

    def test_rom_window_minimum(self) -> None:
        with pytest.raises(ValidationError):
            CrosscheckConfig(rom_window=1)
