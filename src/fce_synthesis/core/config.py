"""Nested pydantic-settings configuration for the synthesis engine.

Each sub-config reads its own ``FCE_<GROUP>_*`` env vars::

    export FCE_STORE_BACKEND=s3
    export FCE_CROSSCHECK_CV_THRESHOLD=15
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class StoreConfig(BaseSettings):
    """Record store configuration.

    Env vars use ``FCE_STORE_`` prefix.
    """

    model_config = {"env_prefix": "FCE_STORE_"}

    backend: Literal["file", "s3", "memory"] = "file"
    store_path: Path = Path("./records")
    blob_path: Path = Path("./records/library")
    s3_bucket: str = ""
    s3_prefix: str = "records/"
    aws_region: str = "us-east-2"


class ProfileConfig(BaseSettings):
    """Remote evaluator-profile store configuration.

    Env vars use ``FCE_PROFILE_`` prefix.
    """

    model_config = {"env_prefix": "FCE_PROFILE_"}

    enabled: bool = False
    table_name: str = "fce-evaluator-profiles"
    aws_region: str = "us-east-1"
    cache_ttl_seconds: float = Field(default=300.0, gt=0.0)
    cache_max_size: int = Field(default=200, gt=0)


class AssemblyConfig(BaseSettings):
    """Document model assembly settings.

    Env vars use ``FCE_ASSEMBLY_`` prefix.
    """

    model_config = {"env_prefix": "FCE_ASSEMBLY_"}

    minutes_per_test: int = Field(default=5, gt=0)
    interview_minutes: int = Field(default=45, ge=0)
    overview_minutes: int = Field(default=5, ge=0)
    bar_max_px: float = Field(default=100.0, gt=0.0)


class CrosscheckConfig(BaseSettings):
    """Thresholds for the consistency crosscheck battery.

    Env vars use ``FCE_CROSSCHECK_`` prefix.
    """

    model_config = {"env_prefix": "FCE_CROSSCHECK_"}

    cv_threshold: float = Field(default=15.0, gt=0.0, le=100.0)
    rapid_exchange_ratio: float = Field(default=0.85, gt=0.0, le=1.0)
    mve_max_deficiency: float = Field(default=20.0, gt=0.0, le=100.0)
    dominance_ratio: float = Field(default=1.10, ge=1.0)
    retest_pass_fraction: float = Field(default=0.8, gt=0.0, le=1.0)
    cv_pass_fraction: float = Field(default=0.7, gt=0.0, le=1.0)
    rom_window: int = Field(default=3, ge=2)
    rom_abs_tolerance: float = Field(default=5.0, ge=0.0)
    rom_rel_tolerance: float = Field(default=0.10, ge=0.0, le=1.0)
    rom_min_values: int = Field(default=6, ge=2)


class RenderServiceConfig(BaseSettings):
    """Remote document-rendering service.

    Env vars use ``FCE_RENDER_`` prefix::

        export FCE_RENDER_BASE_URL=https://render.internal
        export FCE_RENDER_ENDPOINT=/generate-executive-summary
    """

    model_config = {"env_prefix": "FCE_RENDER_"}

    base_url: str = "http://localhost:5001"
    endpoint: str = "/generate-executive-summary"
    timeout: float = Field(default=60.0, gt=0.0)
    api_key: str = ""


class PDFFormattingConfig(BaseSettings):
    """PDF output formatting configuration.

    Env vars use ``FCE_PDF_`` prefix::

        export FCE_PDF_PAGE_SIZE=a4
        export FCE_PDF_INCLUDE_APPENDIX=false
    """

    model_config = {"env_prefix": "FCE_PDF_"}

    page_size: Literal["letter", "a4"] = "letter"
    margin_inches: float = Field(default=0.75, gt=0.0, le=3.0)
    font_family: str = "Helvetica"
    body_font_size: int = Field(default=9, ge=6, le=72)
    heading_font_size: int = Field(default=13, ge=6, le=72)
    include_appendix: bool = True
    include_cover_page: bool = True


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``FCE_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "FCE_OBSERVABILITY_"}

    service_name: str = "fce-synthesis"
    log_level: str = "INFO"


class AppSettings(BaseSettings):
    """Top-level settings aggregating all sub-configs."""

    store: StoreConfig = StoreConfig()
    profile: ProfileConfig = ProfileConfig()
    assembly: AssemblyConfig = AssemblyConfig()
    crosscheck: CrosscheckConfig = CrosscheckConfig()
    render: RenderServiceConfig = RenderServiceConfig()
    pdf: PDFFormattingConfig = PDFFormattingConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
