"""Core module for club-collector."""

from core.models import (
    ClubPage,
    FetchRun,
    NormalizedClub,
    PageInfo,
    RawClub,
    RunStatus,
    ValidatedUrl,
)
from core.config import ClubsApiConfig, FetchSettings
from core.pipeline import ClubSyncPipeline

__all__ = [
    "ClubPage",
    "FetchRun",
    "NormalizedClub",
    "PageInfo",
    "RawClub",
    "RunStatus",
    "ValidatedUrl",
    "ClubsApiConfig",
    "FetchSettings",
    "ClubSyncPipeline",
]
