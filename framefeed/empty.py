"""Plugin types that do nothing: no cameras, empty frames, ignored results."""

from __future__ import annotations

from typing import Optional, Union

from .core import (
    CameraDiscoverer,
    CameraInfo,
    ImageMetadata,
    ImageView,
    ResultsOutput,
    VideoSource,
)


class EmptyCameraDiscoverer(CameraDiscoverer):
    """Discoverer that finds no cameras."""

    def discover(self) -> list[CameraInfo]:
        return []


class EmptyVideoSource(VideoSource):
    """Video source whose frames are always empty."""

    def metadata(self) -> ImageMetadata:
        return ImageMetadata()

    def next_frame(self) -> None:
        return None

    def frame(self) -> ImageView:
        return ImageView()

    def copy_frame(self, buffer: Union[bytearray, memoryview]) -> ImageView:
        return ImageView()

    def execute(self, action: str) -> None:
        return None


class EmptyResultsOutput(ResultsOutput):
    """Output that discards every result."""

    def send(self, metadata: str, image: Optional[ImageView]) -> None:
        return None


def plugin_types() -> dict[str, type]:
    """The plugin types this module provides, by registration name."""
    return {
        "EmptyCameraDiscoverer": EmptyCameraDiscoverer,
        "EmptyVideoSource": EmptyVideoSource,
        "EmptyResultsOutput": EmptyResultsOutput,
    }