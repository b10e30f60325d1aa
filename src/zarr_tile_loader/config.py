"""Configuration to override few parameters."""

import typing as ty
from contextlib import contextmanager

from koyo.config import BaseConfig
from loguru import logger
from pydantic import Field, field_validator

from zarr_tile_loader.enums import DEFAULT_TILE_SIZE
from zarr_tile_loader.utils._appdirs import USER_CONFIG_DIR


# noinspection PyMethodParameters
class Config(BaseConfig):
    """Configuration of few parameters."""

    USER_CONFIG_DIR = USER_CONFIG_DIR
    USER_CONFIG_FILENAME = "config_loader.json"

    quiet: bool = Field(
        False,
        title="Quiet",
        description="Quiet mode.",
        json_schema_extra={
            "in_app": True,
        },
    )
    guess_interleaved: bool = Field(
        True,
        title="Guess interleaved layout",
        description="When the layout is not specified, guess whether the last axis holds RGB/A samples.",
        json_schema_extra={
            "in_app": True,
        },
    )
    read_in_thread: bool = Field(
        True,
        title="Read in thread",
        description="Run blocking store reads in a worker thread so that reads of several channels overlap.",
        json_schema_extra={
            "in_app": False,
        },
    )
    tile_size: int = Field(
        DEFAULT_TILE_SIZE,
        title="Tile size",
        description="Chunk size along spatial axes used for in-memory arrays without chunking information.",
        json_schema_extra={
            "in_app": False,
        },
    )

    @field_validator("tile_size", mode="before")
    @classmethod
    def _validate_tile_size(cls, value: ty.Union[str, int]) -> int:  # type: ignore[misc]
        """Validate tile_size."""
        value = int(value)
        if value < 1:
            raise ValueError("Tile size must be a positive integer.")
        return value

    @contextmanager
    def temporary_override(self, **kwargs: ty.Any) -> ty.Generator[None, None, None]:
        """Temporary override configuration."""
        old_values = {key: getattr(self, key) for key in kwargs}
        for key, value in kwargs.items():
            setattr(self, key, value)
        try:
            yield
        finally:
            for key, value in old_values.items():
                setattr(self, key, value)

    def trace(self, msg: str) -> None:
        """Trace logging."""
        if not self.quiet:
            logger.trace(msg)


CONFIG = Config()  # type: ignore[call-arg]
