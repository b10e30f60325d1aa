"""Base model."""

import typing as ty

from pydantic import BaseModel as _BaseModel


class BaseModel(_BaseModel):
    """Base model."""

    class Config:
        """Config."""

        arbitrary_types_allowed = True

    def to_dict(self) -> ty.Dict:
        """Convert to dict."""
        return self.model_dump()
