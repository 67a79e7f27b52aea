"""
Display Constants

Sentinel strings and locale tables used when shaping catalog records
for rendering. The catalog UI is French.
"""


class DisplaySentinels:
    """Placeholder strings for missing values."""

    UNKNOWN_GENRE = "Genre inconnu"
    UNRATED = "Non noté"
    UNKNOWN_DATE = "Date inconnue"
    UNKNOWN_YEAR = "Année inconnue"
    UNKNOWN_RUNTIME = "Durée inconnue"
    ELLIPSIS = "..."


class DisplayDefaults:
    """Default display parameters."""

    OVERVIEW_MAX_LENGTH = 150
    MIN_RATING = 7.0
    EPOCH_DATE = "1970-01-01"
    LOCALE = "fr"


class MediaKind:
    """Media kinds understood by the genre taxonomy."""

    MOVIE = "movie"
    TV = "tv"

    ALL = (MOVIE, TV)


# Month names per locale, January first
MONTH_NAMES: dict[str, tuple[str, ...]] = {
    "fr": (
        "janvier",
        "février",
        "mars",
        "avril",
        "mai",
        "juin",
        "juillet",
        "août",
        "septembre",
        "octobre",
        "novembre",
        "décembre",
    ),
    "en": (
        "January",
        "February",
        "March",
        "April",
        "May",
        "June",
        "July",
        "August",
        "September",
        "October",
        "November",
        "December",
    ),
}

# Certification lookup order
CERTIFICATION_COUNTRIES: tuple[str, ...] = ("FR", "US")


__all__ = [
    "CERTIFICATION_COUNTRIES",
    "MONTH_NAMES",
    "DisplayDefaults",
    "DisplaySentinels",
    "MediaKind",
]
