"""
StreamFlix Constants Package

Re-exports the constant namespaces used across the package.
"""

from .cache import Cache, CacheEndpoint
from .cli import CLICommands, CLIDefaults, CLIHelp
from .display import (
    CERTIFICATION_COUNTRIES,
    MONTH_NAMES,
    DisplayDefaults,
    DisplaySentinels,
    MediaKind,
)
from .http_codes import HTTPStatusCodes
from .tmdb import (
    BackdropSize,
    PosterSize,
    ProfileSize,
    TimeWindow,
    TMDBConfig,
    TMDBErrorMessages,
)

__all__ = [
    "CERTIFICATION_COUNTRIES",
    "CLICommands",
    "CLIDefaults",
    "CLIHelp",
    "MONTH_NAMES",
    "BackdropSize",
    "Cache",
    "CacheEndpoint",
    "DisplayDefaults",
    "DisplaySentinels",
    "HTTPStatusCodes",
    "MediaKind",
    "PosterSize",
    "ProfileSize",
    "TMDBConfig",
    "TMDBErrorMessages",
    "TimeWindow",
]
