# API Routes Module
from app.api.routes import (
    phases,
    progress,
    country_profiles,
    applications,
)

__all__ = [
    "phases",
    "progress",
    "country_profiles",
    "applications",
]
