from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Deck Fastener Takeoff"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Sketch
    default_grid_inches: int = 12
    default_deck_width_ft: float = 20.0
    default_deck_height_ft: float = 13.0
    canvas_width: float = 860.0   # px
    canvas_height: float = 400.0  # px
    canvas_pad: float = 24.0      # px

    # Takeoff defaults
    board_width_in: float = 5.5
    gap_in: float = 0.25
    joist_spacing_in: float = 16.0
    waste_factor: float = 1.05

    model_config = SettingsConfigDict(env_prefix="DECKCALC_")


settings = Settings()
