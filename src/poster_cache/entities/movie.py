"""Movie metadata domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Movie:
    """A recommendation candidate.

    Attributes:
        id: Metadata API identifier, also the watched-list identifier
        title: Display title
        poster_path: Relative poster path, None when the movie has no poster
    """

    id: int
    title: str
    poster_path: str | None = None

    def poster_url(self, image_base_url: str) -> str | None:
        """Build the poster URL used as the cache key."""
        if self.poster_path is None:
            return None
        return f"{image_base_url.rstrip('/')}{self.poster_path}"


@dataclass(frozen=True)
class Genre:
    """A movie genre that candidates can be filtered by."""

    id: int
    name: str


@dataclass(frozen=True)
class CastMember:
    """A credited cast member."""

    id: int
    name: str
    character: str | None = None


@dataclass(frozen=True)
class MovieDetail:
    """Full details for a single movie, including credits."""

    id: int
    title: str
    overview: str | None = None
    release_date: str | None = None
    runtime: int | None = None
    tagline: str | None = None
    production_countries: tuple[str, ...] = ()
    cast: tuple[CastMember, ...] = ()
