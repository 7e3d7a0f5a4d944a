"""WebSocket client that pulls frames from a frame server and pushes results back."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.sync.client import ClientConnection, connect

from .core import ImageMetadata, ImageView, VideoSourceError, VideoSourceStatus
from .environment import server_address

logger = logging.getLogger(__name__)

# Just above what a 4k image needs.
MAX_MESSAGE_SIZE = 280_000_000


class ClientError(ConnectionError):
    """Raised when a request to the frame server fails."""


def _string(document: dict, key: str) -> str:
    value = document[key]
    if not isinstance(value, str):
        raise TypeError(f"{key!r} is not a string")
    return value


def _integer(document: dict, key: str) -> int:
    value = document[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key!r} is not an integer")
    return value


def _uri(host: str, port: int) -> str:
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"ws://{host}:{port}/"


class Client:
    """Connection to a frame server speaking the JSON request protocol.

    Every request is a JSON object whose ``"request"`` member names it; a
    non-empty ``"body"`` object is included when given. The server replies
    with a single message.
    """

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None):
        default_host, default_port = server_address()
        self.host = default_host if host is None else host
        self.port = default_port if port is None else port
        self._format = ""
        self._frame_data = b""
        try:
            self._connection: ClientConnection = connect(
                _uri(self.host, self.port), max_size=MAX_MESSAGE_SIZE
            )
        except (OSError, WebSocketException) as exc:
            raise ClientError(
                f"Error while initializing WebSocket connection: {exc}"
            ) from exc
        logger.debug("WebSocket client connected to %s:%s", self.host, self.port)
        try:
            self._frame_metadata = self.metadata()
        except ClientError:
            self.close()
            raise

    def metadata(self) -> ImageMetadata:
        """Ask the server to describe the frames it produces.

        A reply holding a ``"format"`` member describes frames in a pixel
        format this client cannot read; the format is remembered and the
        frames are reported as interleaved 8-bit RGB.
        """
        reply = self._request("metadata")
        try:
            document = json.loads(reply)
            if not isinstance(document, dict):
                raise TypeError("metadata reply is not a JSON object")
            if "format" in document:
                pixel_format = _string(document, "format")
                width = _integer(document, "width")
                height = _integer(document, "height")
                self._format = pixel_format
                return ImageMetadata(
                    "uint8", width, height, "RGB", "interleaved", "topLeft"
                )
            return ImageMetadata(
                _string(document, "dataType"),
                _integer(document, "width"),
                _integer(document, "height"),
                _string(document, "colorSpace"),
                _string(document, "layout"),
                _string(document, "orientation"),
            )
        except (ValueError, KeyError, TypeError) as exc:
            raise ClientError("Error while parsing 'metadata' response") from exc

    def next_frame(self) -> None:
        """Fetch the next frame from the server and keep it."""
        reply = self._request("frame")
        if self._format:
            raise VideoSourceError(VideoSourceStatus.PIXEL_FORMAT_NOT_SUPPORTED)
        self._frame_data = reply

    def frame(self) -> ImageView:
        """A view of the last fetched frame."""
        return ImageView(self._frame_metadata, self._frame_data)

    def frame_size(self) -> int:
        """Size in bytes of the last fetched frame."""
        return len(self._frame_data)

    def execute(self, action: str) -> None:
        """Ask the server to carry out ``action``."""
        self._request("execute", {"action": action})

    def send_result(self, result: dict[str, Any]) -> bytes:
        """Send a processing result to the server and return its acknowledgement."""
        return self._request("result", result)

    def close(self) -> None:
        """Close the connection with a normal closure."""
        self._connection.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _request(self, request_type: str, body: Optional[dict] = None) -> bytes:
        request: dict[str, Any] = {"request": request_type}
        if body:
            request["body"] = body
        message = json.dumps(request, separators=(",", ":"))
        try:
            self._connection.send(message)
            reply = self._connection.recv()
        except (ConnectionClosed, OSError, TimeoutError) as exc:
            raise ClientError(f"Error while processing request: {exc}") from exc
        return reply.encode() if isinstance(reply, str) else reply