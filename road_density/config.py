"""
Configuration settings for the road & trail density service
"""

from dataclasses import dataclass, field
from typing import List
import os


@dataclass
class APIConfig:
    """Overpass API endpoint and request behaviour"""
    # Options: overpass-api.de (main), lz4.overpass-api.de, z.overpass-api.de
    overpass_url: str = field(
        default_factory=lambda: os.environ.get(
            "OVERPASS_URL", "https://overpass-api.de/api/interpreter"
        )
    )
    overpass_timeout: int = 25  # Server-side [timeout:] in the query

    # Request settings
    request_timeout: float = 30.0
    max_retries: int = 3
    retry_base_delay: float = 0.5  # Doubles on each attempt

    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "ROAD_DENSITY_USER_AGENT", "RoadDensity/1.0"
        )
    )


@dataclass
class TilingConfig:
    """When and how large areas are split into tiles"""
    area_threshold_km2: float = 60.0
    tile_size_deg: float = 0.05


@dataclass
class FetchConfig:
    """Batching of concurrent tile fetches"""
    batch_size: int = 500
    inter_batch_pause_s: float = 0.2


@dataclass
class AggregationConfig:
    """Response shaping"""
    # Above this combined length the raw segments are left out of the result
    max_geometry_km: float = 1500.0


@dataclass
class PipelineConfig:
    """Pipeline configuration"""
    api: APIConfig = field(default_factory=APIConfig)
    tiling: TilingConfig = field(default_factory=TilingConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    aggregation: AggregationConfig = field(default_factory=AggregationConfig)

    # OSM highway values per category
    road_tags: List[str] = field(default_factory=lambda: [
        "motorway",
        "trunk",
        "primary",
        "secondary",
        "tertiary",
        "unclassified",
        "residential",
    ])
    trail_tags: List[str] = field(default_factory=lambda: [
        "pedestrian",
        "track",
        "path",
        "footway",
        "bridleway",
        "steps",
        "via_ferrata",
        "cycleway",
    ])


# Global config instance
config = PipelineConfig()


def get_config() -> PipelineConfig:
    """Get global configuration"""
    return config


def validate_config(config: PipelineConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.api is None:
        errors.append("api configuration is required but not set")
    else:
        if not config.api.overpass_url:
            errors.append("api.overpass_url is required but not set")
        if config.api.max_retries < 1:
            errors.append(f"api.max_retries must be at least 1, got {config.api.max_retries}")
        if config.api.retry_base_delay < 0:
            errors.append(f"api.retry_base_delay must not be negative, got {config.api.retry_base_delay}")
        if config.api.request_timeout <= 0:
            errors.append(f"api.request_timeout must be positive, got {config.api.request_timeout}")

    if config.tiling.area_threshold_km2 <= 0:
        errors.append(f"tiling.area_threshold_km2 must be positive, got {config.tiling.area_threshold_km2}")
    if config.tiling.tile_size_deg <= 0:
        errors.append(f"tiling.tile_size_deg must be positive, got {config.tiling.tile_size_deg}")

    if config.fetch.batch_size < 1:
        errors.append(f"fetch.batch_size must be at least 1, got {config.fetch.batch_size}")
    if config.fetch.inter_batch_pause_s < 0:
        errors.append(f"fetch.inter_batch_pause_s must not be negative, got {config.fetch.inter_batch_pause_s}")

    if config.aggregation.max_geometry_km < 0:
        errors.append(f"aggregation.max_geometry_km must not be negative, got {config.aggregation.max_geometry_km}")

    overlap = set(config.road_tags) & set(config.trail_tags)
    if overlap:
        errors.append(f"road_tags and trail_tags overlap: {sorted(overlap)}")
    if not config.road_tags and not config.trail_tags:
        errors.append("at least one road or trail tag is required")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
