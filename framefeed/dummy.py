"""Plugin types that emulate two cameras producing a fixed test pattern."""

from __future__ import annotations

from itertools import cycle, islice
from typing import Mapping, Optional, Union

from .core import (
    CameraDiscoverer,
    CameraInfo,
    ImageMetadata,
    ImageView,
    ResultsOutput,
    VideoSource,
)

SOURCE_TYPE_NAME = "dummyVideoSource"

_METADATA = ImageMetadata("uint8", 200, 200, "RGB", "planar", "topLeft")


class DummyDiscoverer(CameraDiscoverer):
    """Reports two emulated cameras."""

    def discover(self) -> list[CameraInfo]:
        print("Discovering available cameras...")
        return [
            CameraInfo(
                "DummyNativePluginCameraId1",
                SOURCE_TYPE_NAME,
                "External Dummy Camera #1",
                "DummyNativePluginCameraConnection1",
            ),
            CameraInfo(
                "DummyNativePluginCameraId1",
                SOURCE_TYPE_NAME,
                "External Dummy Camera #2",
                "DummyNativePluginCameraConnection2",
            ),
        ]


class DummySource(VideoSource):
    """Video source whose frame is a byte ramp that wraps at 256."""

    def __init__(
        self,
        camera_info: CameraInfo,
        options: Optional[Mapping[str, str]] = None,
    ):
        options = dict(options or {})
        print(f"Initiating VideoSource connection with {camera_info}")
        print(f"With options: {options}")
        size = _METADATA.width * _METADATA.height * 3
        self._frame = bytes(islice(cycle(range(256)), size))

    def metadata(self) -> ImageMetadata:
        return _METADATA

    def next_frame(self) -> None:
        return None

    def frame(self) -> ImageView:
        return ImageView(self.metadata(), self._frame)

    def copy_frame(self, buffer: Union[bytearray, memoryview]) -> ImageView:
        print(f"Copying frame to [{id(buffer):#x}]")
        return super().copy_frame(buffer)

    def execute(self, action: str) -> None:
        print(f"Executing action: {action}")


class DummyOutput(ResultsOutput):
    """Prints every result it receives."""

    def send(self, metadata: str, image: Optional[ImageView]) -> None:
        print(f"Received result: {metadata}")


def plugin_types() -> dict[str, type]:
    """The plugin types this module provides, by registration name."""
    return {
        "dummyDiscoverer": DummyDiscoverer,
        SOURCE_TYPE_NAME: DummySource,
        "dummyOutput": DummyOutput,
    }