"""Common data types and interfaces for video sources, discoverers and outputs."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass, field
from typing import Optional, Union

Buffer = Union[bytes, bytearray, memoryview]

_SAMPLE_SIZES = {
    "uint8": 1,
    "int8": 1,
    "uint16": 2,
    "int16": 2,
    "float32": 4,
}


@dataclass(frozen=True)
class ImageMetadata:
    """Describes the layout of the pixels in a frame."""

    datatype: str = ""
    width: int = 0
    height: int = 0
    color_space: str = ""
    layout: str = ""
    orientation: str = ""

    def frame_size(self) -> int:
        """Number of bytes a frame with this metadata occupies."""
        samples = self.width * self.height * len(self.color_space)
        return samples * _SAMPLE_SIZES.get(self.datatype, 1)

    def __str__(self) -> str:
        return (
            f"{self.datatype} {self.width}x{self.height} "
            f"{self.color_space} {self.layout} {self.orientation}"
        )


@dataclass(frozen=True)
class ImageView:
    """A frame's metadata together with a reference to its pixel data."""

    metadata: ImageMetadata = field(default_factory=ImageMetadata)
    data: Optional[Buffer] = None

    @property
    def datatype(self) -> str:
        return self.metadata.datatype

    @property
    def width(self) -> int:
        return self.metadata.width

    @property
    def height(self) -> int:
        return self.metadata.height

    @property
    def color_space(self) -> str:
        return self.metadata.color_space

    @property
    def layout(self) -> str:
        return self.metadata.layout

    @property
    def orientation(self) -> str:
        return self.metadata.orientation


@dataclass(frozen=True)
class CameraInfo:
    """Identifies a camera and the video source type able to open it."""

    id: str = ""
    type: str = ""
    name: str = ""
    connection: str = ""

    def valid(self) -> bool:
        """A camera is usable when both its id and source type are known."""
        return bool(self.id) and bool(self.type)

    def __str__(self) -> str:
        return (
            f"{{id: {self.id}, type: {self.type}, name: {self.name}, "
            f"connection: {self.connection}}}"
        )


class VideoSourceStatus(enum.Enum):
    """Outcome of a video source operation."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    PIXEL_FORMAT_NOT_SUPPORTED = "pixelFormatNotSupported"


class VideoSourceError(Exception):
    """Raised when a video source cannot deliver a frame."""

    def __init__(self, status: VideoSourceStatus, message: Optional[str] = None):
        super().__init__(message or status.value)
        self.status = status


class VideoSource(abc.ABC):
    """A producer of image frames."""

    @abc.abstractmethod
    def metadata(self) -> ImageMetadata:
        """Describe the frames this source produces."""

    @abc.abstractmethod
    def next_frame(self) -> None:
        """Acquire the next frame; raise VideoSourceError on failure."""

    @abc.abstractmethod
    def frame(self) -> ImageView:
        """Return a view of the last acquired frame."""

    def copy_frame(self, buffer: Union[bytearray, memoryview]) -> ImageView:
        """Copy the last frame into ``buffer`` and return a view of it."""
        view = self.frame()
        if view.data is not None:
            size = len(view.data)
            target = memoryview(buffer)
            if len(target) < size:
                raise ValueError(
                    f"buffer holds {len(target)} bytes, frame needs {size}"
                )
            target[:size] = view.data
        return ImageView(view.metadata, buffer)

    @abc.abstractmethod
    def execute(self, action: str) -> None:
        """Carry out an arbitrary action on the source."""


class CameraDiscoverer(abc.ABC):
    """Lists the cameras that can be opened."""

    @abc.abstractmethod
    def discover(self) -> list[CameraInfo]:
        """Return information on every available camera."""

    def __call__(self) -> list[CameraInfo]:
        return self.discover()


class ResultsOutput(abc.ABC):
    """Receives processing results."""

    @abc.abstractmethod
    def send(self, metadata: str, image: Optional[ImageView]) -> None:
        """Deliver a JSON result document and, optionally, its frame."""

    def __call__(self, metadata: str, image: Optional[ImageView] = None) -> None:
        self.send(metadata, image)