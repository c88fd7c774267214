"""Configuration loader for the analytics pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import ConfigError

ENV_PREFIX = "SERVICE_ANALYTICS_"
PROJECT_ROOT = Path(__file__).resolve().parents[1]

SERVICE_SOURCE_PREFIX = "KOSDY-PROD."
SERVICE_SOURCE_SUFFIX = ".csv"
CASE_REPORT_FILE = "sagKlasseReport.xlsx"
SERVICE_OUTPUT_FILE = "serviceData.json"
CASE_OUTPUT_FILE = "klasseData.json"


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + key)
    if value is not None:
        value = value.strip()
        if value == "":
            return default
        return value
    return default


def _get_int(key: str, default: int, minimum: int = 0) -> int:
    value = _get_env(key)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigError(f"Environment variable {ENV_PREFIX}{key} must be an integer") from exc
    if parsed < minimum:
        raise ConfigError(f"Environment variable {ENV_PREFIX}{key} must be >= {minimum}, got {parsed}")
    return parsed


def _get_path(key: str, default: Path) -> Path:
    value = _get_env(key)
    if value is None:
        return default
    return Path(value).expanduser()


@dataclass(frozen=True)
class RankingLimits:
    """Top-N truncation per ranked dimension. ``None`` keeps every entry."""

    it_systems: Optional[int] = 15
    services: Optional[int] = 15
    operations: Optional[int] = 15
    support_systems: Optional[int] = None
    versions: Optional[int] = 10
    matrix: Optional[int] = 50
    classifications: Optional[int] = 20


@dataclass(frozen=True)
class PipelineConfig:
    data_dir: Path
    output_dir: Path
    log_level: str = "INFO"
    limits: RankingLimits = field(default_factory=RankingLimits)
    progress_every: int = 5000

    @property
    def case_report_path(self) -> Path:
        return self.data_dir / CASE_REPORT_FILE

    @property
    def service_output_path(self) -> Path:
        return self.output_dir / SERVICE_OUTPUT_FILE

    @property
    def case_output_path(self) -> Path:
        return self.output_dir / CASE_OUTPUT_FILE


def load_config() -> PipelineConfig:
    defaults = RankingLimits()
    limits = RankingLimits(
        it_systems=_get_int("TOP_IT_SYSTEMS", defaults.it_systems, minimum=1),
        services=_get_int("TOP_SERVICES", defaults.services, minimum=1),
        operations=_get_int("TOP_OPERATIONS", defaults.operations, minimum=1),
        versions=_get_int("TOP_VERSIONS", defaults.versions, minimum=1),
        matrix=_get_int("TOP_MATRIX", defaults.matrix, minimum=1),
        classifications=_get_int("TOP_CLASSIFICATIONS", defaults.classifications, minimum=1),
    )
    return PipelineConfig(
        data_dir=_get_path("DATA_DIR", PROJECT_ROOT / "data"),
        output_dir=_get_path("OUTPUT_DIR", PROJECT_ROOT / "public"),
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        limits=limits,
        progress_every=_get_int("PROGRESS_EVERY", 5000, minimum=0),
    )
