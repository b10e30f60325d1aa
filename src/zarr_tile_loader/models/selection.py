"""Dimension labels and named selections."""

from __future__ import annotations

import typing as ty

from pydantic import field_validator

from zarr_tile_loader.models.base import BaseModel


class DimensionLabel(BaseModel):
    """Label of a single array axis.

    Nominal dimensions (e.g. channels) can list their ``values`` so that they can be selected by name.
    """

    name: str
    values: ty.Optional[list[str]] = None

    @classmethod
    def from_value(cls, value: str | dict | DimensionLabel) -> DimensionLabel:
        """Create label from a name, dictionary or another label."""
        if isinstance(value, DimensionLabel):
            return value
        if isinstance(value, str):
            return cls(name=value)
        return cls(**value)

    def index_of(self, value: str) -> int | None:
        """Return index of a named value along this dimension."""
        if self.values and value in self.values:
            return self.values.index(value)
        return None


class DimensionSelection(BaseModel):
    """Selection of a single index along a labelled dimension."""

    id: str
    index: ty.Union[int, str] = 0

    @field_validator("index", mode="before")
    @classmethod
    def _validate_index(cls, value: ty.Any) -> ty.Union[int, str]:
        """Validate index."""
        if isinstance(value, str):
            return value
        value = int(value)
        if value < 0:
            raise ValueError("Index must be non-negative.")
        return value
