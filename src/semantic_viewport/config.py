"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine tunables loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SEMVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Hover (spatial-semantic) parameters
    hover_radius_px: float = Field(
        default=80.0,
        description="Screen-space radius around the cursor used to collect spatial nodes"
    )
    hover_similarity_threshold: float = Field(
        default=0.7,
        description="Minimum cosine similarity to the hover centroid for highlighting"
    )

    # Edge magnet margins (screen pixels, converted to world units per frame)
    pull_line_px: float = 25.0  # Where pulled nodes are placed, from viewport edge
    focus_pull_line_px: float = 80.0  # Inner pull line for focused nodes
    ui_proximity_px: float = 10.0  # Extra inset on sides next to UI chrome (left, top)
    viewport_overscan_px: float = 40.0  # Cliff zone extends this far past the edge

    max_pulled_nodes: int = Field(
        default=20,
        description="Capacity for adjacency-ranked keyword pulls per frame"
    )
    max_pulled_content_nodes: int = Field(
        default=20,
        description="Capacity for off-screen content pulls per frame"
    )

    # Camera
    camera_z_scale_base: float = Field(
        default=500.0,
        description="k = camera_z_scale_base / camera_z for 3D renderers"
    )
    camera_fov_degrees: float = 10.0

    # Position recovery jitter (world units, full width)
    restore_neighbor_jitter: float = 50.0
    restore_centroid_jitter: float = 200.0


def get_test_settings() -> Settings:
    """Get test environment settings (ignores any local .env)."""
    return Settings(_env_file=None)


# Global settings instance
settings = Settings()
