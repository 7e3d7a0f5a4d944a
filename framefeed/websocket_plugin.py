"""Plugin types that read frames from and send results to a WebSocket frame server."""

from __future__ import annotations

import json
from typing import Optional, Union

from .client import Client
from .core import (
    CameraDiscoverer,
    CameraInfo,
    ImageMetadata,
    ImageView,
    ResultsOutput,
    VideoSource,
)
from .environment import server_address


class WebSocketDiscoverer(CameraDiscoverer):
    """Reports the single camera served by the configured frame server."""

    def discover(self) -> list[CameraInfo]:
        host, port = server_address()
        return [
            CameraInfo(
                "websocket_plugin",
                "websocketInput",
                "WebSocket Plugin",
                f"{host}:{port}",
            )
        ]


class WebSocketInput(VideoSource):
    """Video source fed by a frame server."""

    def __init__(self, client: Optional[Client] = None):
        self.client = client if client is not None else Client()

    def metadata(self) -> ImageMetadata:
        return self.client.metadata()

    def next_frame(self) -> None:
        self.client.next_frame()

    def frame(self) -> ImageView:
        return self.client.frame()

    def copy_frame(self, buffer: Union[bytearray, memoryview]) -> ImageView:
        view = self.frame()
        size = self.client.frame_size()
        with memoryview(buffer) as target:
            if target.nbytes < size:
                raise ValueError(
                    f"Insufficient capacity in frame buffer: "
                    f"{target.nbytes} bytes, frame needs {size}"
                )
            target.cast("B")[:size] = view.data
        return ImageView(view.metadata, buffer)

    def execute(self, action: str) -> None:
        self.client.execute(action)


class WebSocketOutput(ResultsOutput):
    """Results output that forwards every result to a frame server."""

    def __init__(self, client: Optional[Client] = None):
        self.client = client if client is not None else Client()

    def send(self, metadata: str, image: Optional[ImageView]) -> None:
        result = json.loads(metadata)
        if not isinstance(result, dict):
            raise ValueError("result metadata is not a JSON object")
        self.client.send_result(result)


def plugin_types() -> dict[str, type]:
    """The plugin types this module provides, by registration name."""
    return {
        "websocketDiscoverer": WebSocketDiscoverer,
        "websocketInput": WebSocketInput,
        "websocketOutput": WebSocketOutput,
    }