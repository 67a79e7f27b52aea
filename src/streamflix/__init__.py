"""StreamFlix: cached, fallback-tolerant access to the TMDB movie and TV catalog."""

from streamflix.shared.constants import CLIDefaults

__version__ = CLIDefaults.VERSION

__all__ = ["__version__"]
