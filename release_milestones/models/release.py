"""Release model."""

from datetime import datetime

from pydantic import BaseModel


class Release(BaseModel):
    """Published (or draft) release of a repository."""

    name: str = ""
    tag_name: str = ""
    published_at: datetime | None = None
    draft: bool = False
    prerelease: bool = False
