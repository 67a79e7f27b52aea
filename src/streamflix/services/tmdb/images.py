"""Image URL construction for TMDB poster/backdrop paths."""

from __future__ import annotations

from streamflix.shared.constants import PosterSize, TMDBConfig


def build_image_url(
    path: str | None,
    size: str = PosterSize.LARGE,
    base_url: str = TMDBConfig.IMAGE_BASE_URL,
) -> str | None:
    """Return the absolute image URL, or None when there is no path.

    Example:
        >>> build_image_url("/abc.jpg", "w342")
        'https://image.tmdb.org/t/p/w342/abc.jpg'
    """
    if not path:
        return None
    return f"{base_url.rstrip('/')}/{size}{path}"
