"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class PrefetchRequest(BaseModel):
    """Request DTO for warming the poster cache."""

    url: str = Field(..., description="Poster URL to prefetch", min_length=1)


class MarkWatchedRequest(BaseModel):
    """Request DTO for adding a movie to the watched list."""

    movie_id: int = Field(..., description="Movie id to mark as watched")


class CandidateItem(BaseModel):
    """A recommendation candidate supplied by the client."""

    id: int = Field(..., description="Movie id")
    title: str = Field("", description="Display title")
    poster_path: str | None = Field(None, description="Relative poster path, if any")


class FilterCandidatesRequest(BaseModel):
    """Request DTO for dropping already-watched candidates."""

    candidates: list[CandidateItem] = Field(
        default_factory=list,
        description="Candidates in display order",
    )
