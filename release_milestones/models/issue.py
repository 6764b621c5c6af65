"""Issue / pull request record model."""

from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class IssueRecord(BaseModel):
    """Issue or pull request as returned by the issues listing.

    Only the fields used for filtering and display are declared; every
    other field of the API payload is kept as an extra field.
    """

    model_config = ConfigDict(extra="allow")

    number: int
    title: str = ""
    state: str = "open"
    closed_at: datetime | None = None
    html_url: str | None = None

    @property
    def is_pull_request(self) -> bool:
        """True when the record is a pull request rather than a plain issue."""
        return (self.model_extra or {}).get("pull_request") is not None

    def raw(self) -> Dict[str, Any]:
        """Return the fields the API sent as a JSON-compatible dict."""
        return self.model_dump(mode="json", exclude_unset=True)
