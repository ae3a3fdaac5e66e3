"""
Configuration settings using Pydantic Settings.

Analysis thresholds live here rather than in the detectors so that
deployments can tune them from the environment, e.g.
``RIFTCOACH_THRESHOLDS__OBJECTIVE_PROXIMITY=4500``.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisThresholds(BaseModel):
    """Numeric thresholds used by detectors, scoring and recommendations.

    Distances are in Summoner's Rift map units, times in milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    # Death detector
    ally_isolation_distance: int = Field(2500, gt=0)
    tower_danger_radius: int = Field(850, gt=0)
    gold_deficit: int = Field(1000, gt=0, description="Death flagged below -gold_deficit")
    level_deficit: int = Field(1, ge=0, description="Death flagged below -level_deficit")
    gank_min_assists: int = Field(2, ge=1)

    # Resource (CS) detector
    checkpoint_step_minutes: int = Field(5, gt=0)
    checkpoint_limit_minutes: int = Field(30, gt=0)
    benchmark_start_minute: int = Field(10, ge=0)
    cs_deficit: int = Field(15, gt=0)
    cs_deficit_worsening: int = Field(10, ge=0)
    cs_severe_deficit: int = Field(30, gt=0)
    benchmark_severe_ratio: float = Field(0.6, gt=0, le=1)
    gold_per_minion: int = Field(21, gt=0)

    # Vision detector
    vision_window_minutes: int = Field(5, gt=0)
    vision_start_minute: int = Field(10, ge=0)

    # Objective detector
    objective_proximity: int = Field(4000, gt=0)
    herald_proximity: int = Field(5000, gt=0)
    objective_far_distance: int = Field(6000, gt=0)
    respawn_early_ms: int = Field(15_000, ge=0)
    respawn_mid_ms: int = Field(30_000, ge=0)
    respawn_late_ms: int = Field(50_000, ge=0)

    # Recommendations
    max_tips: int = Field(5, ge=1, le=5)
    max_role_tips: int = Field(2, ge=0)
    max_related_mistakes: int = Field(3, ge=0, le=3)
    low_score_threshold: int = Field(60, ge=0, le=100)


DEFAULT_THRESHOLDS = AnalysisThresholds()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RIFTCOACH_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Logging level")
    log_json: bool | None = Field(
        None, description="Render logs as JSON; unset picks JSON when stderr is not a TTY"
    )
    parallel_detectors: bool = Field(
        False, description="Run the four detectors in a thread pool"
    )
    detector_workers: int = Field(4, ge=1, le=4)
    thresholds: AnalysisThresholds = Field(default_factory=AnalysisThresholds)


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
