"""
Application settings loaded from environment variables or a .env file.

Copy .env.example to .env and fill in your keys before running.

Hot-reload
----------
Call ``reload_settings()`` (or POST /api/reload-config) to re-read the .env
file without restarting the server.  Useful when you add OPENROUTER_API_KEY
to .env after the server is already running.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8",
    )

    # ── OpenRouter ────────────────────────────────────────────────────────────
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"

    # ── Panel detection ───────────────────────────────────────────────────────
    vision_model: str = "google/gemini-2.5-flash"
    # Low temperature keeps bounding boxes stable between calls
    vision_temperature: float = 0.2

    # ── PDF rendering ─────────────────────────────────────────────────────────
    # Multiple of the 72-units-per-inch PDF space, so 2.0 renders at 144 DPI
    pdf_render_scale: float = 2.0
    pdf_jpeg_quality: int = 80

    # ── Panel zoom ────────────────────────────────────────────────────────────
    panel_padding_factor: float = 0.85     # 0.85–0.95 leaves a margin around the panel
    panel_max_scale: float = 5.0

    # ── Storage ───────────────────────────────────────────────────────────────
    storage_root: str = "storage"

    # ── Server ────────────────────────────────────────────────────────────────
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000


# ── Global singleton + hot-reload helper ─────────────────────────────────────
settings = Settings()


def reload_settings() -> Settings:
    """
    Re-read .env from disk and update the global ``settings`` singleton *in place*.

    Every module does ``from panelscope.config import settings`` so they all
    hold a reference to the same object.  Mutating the object's ``__dict__``
    means every module immediately sees the new values.
    """
    fresh = Settings()
    settings.__dict__.update(fresh.__dict__)
    return settings
