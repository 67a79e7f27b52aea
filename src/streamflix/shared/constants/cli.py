"""
CLI Constants
"""


class CLIDefaults:
    """CLI default values."""

    VERSION = "0.1.0"
    EXIT_ERROR = 1
    TABLE_LIMIT = 20


class CLICommands:
    """Command names."""

    POPULAR = "popular"
    TRENDING = "trending"
    TV = "tv"
    SEARCH = "search"
    MOVIE = "movie"
    SHOW = "show"
    GENRES = "genres"


class CLIHelp:
    """Help texts."""

    APP_NAME = "streamflix"
    APP_DESCRIPTION = "Browse the TMDB movie and TV catalog from the terminal."
    APP_STYLE = "rich"
    VERSION_TEXT = "StreamFlix v{version}"

    PAGE_HELP = "Result page to fetch"
    TIME_WINDOW_HELP = "Trending time window (day or week)"
    QUERY_HELP = "Free-text search query"
    ID_HELP = "TMDB identifier"
    LIMIT_HELP = "Maximum number of rows to display"
    MIN_RATING_HELP = "Only show records rated at least this value"
    SORT_HELP = "Sort order: popularity, rating or date"
