"""WebSocket servers that answer JSON requests from frame clients."""

from __future__ import annotations

import argparse
import json
import sys
import threading
from time import sleep
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple, Union

from websockets.exceptions import ConnectionClosed, ConnectionClosedOK
from websockets.sync.server import ServerConnection, serve

from .core import ImageMetadata

RequestHandler = Callable[[ServerConnection, dict], None]
Handlers = Union[Mapping[str, RequestHandler], Iterable[Tuple[str, RequestHandler]]]

_GOING_AWAY = 1001


class Server:
    """WebSocket server that dispatches JSON requests to handlers.

    Each message must be a JSON object with a ``"request"`` string naming
    the handler. An optional ``"body"`` object is passed to the handler;
    without one the handler receives an empty dict. Handlers write their
    replies to the connection themselves.
    """

    def __init__(self, host: str, port: int, handlers: Handlers):
        self.host = host
        self._requested_port = port
        self._handlers: dict[str, RequestHandler] = dict(handlers)
        self._server: Optional[Any] = None
        self._thread: Optional[threading.Thread] = None
        self._running = threading.Event()
        self._connections: set[ServerConnection] = set()
        self._lock = threading.Lock()

    @property
    def port(self) -> int:
        """The port the server listens on, once started."""
        if self._server is not None:
            return self._server.socket.getsockname()[1]
        return self._requested_port

    def start(self) -> "Server":
        """Bind the socket and begin accepting connections in the background."""
        if self._server is not None:
            raise RuntimeError("server already started")
        self._server = serve(self._session, self.host, self._requested_port)
        self._running.set()
        self._thread = threading.Thread(
            target=self._server.serve_forever,
            name=f"websocket-server-{self.port}",
            daemon=True,
        )
        self._thread.start()
        return self

    def close(self) -> None:
        """Stop accepting connections and end every open session."""
        if self._server is None:
            return
        self._running.clear()
        with self._lock:
            connections = list(self._connections)
        for connection in connections:
            connection.close(_GOING_AWAY)
        self._server.shutdown()
        if self._thread is not None:
            self._thread.join()
        self._server = None
        self._thread = None

    def __enter__(self) -> "Server":
        return self.start()

    def __exit__(self, *args: object) -> None:
        self.close()

    def _session(self, connection: ServerConnection) -> None:
        with self._lock:
            self._connections.add(connection)
        try:
            while self._running.is_set():
                self._handle_request(connection)
        except ConnectionClosedOK:
            pass
        except ConnectionClosed as exc:
            print(f"Error: {exc}", file=sys.stderr)
        except Exception as exc:
            print(f"Error: {exc}", file=sys.stderr)
        finally:
            with self._lock:
                self._connections.discard(connection)

    def _handle_request(self, connection: ServerConnection) -> None:
        message = connection.recv()
        request = json.loads(message)
        if not isinstance(request, dict):
            raise TypeError("request is not a JSON object")
        request_type = request["request"]
        if not isinstance(request_type, str):
            raise TypeError("request type is not a string")
        handler = self._handlers[request_type]
        if "body" in request:
            body = request["body"]
            if not isinstance(body, dict):
                raise TypeError("request body is not a JSON object")
        else:
            body = {}
        handler(connection, body)


class IOServer(Server):
    """Server that serves frame metadata, generated frames and accepts results."""

    def __init__(self, host: str, port: int):
        super().__init__(
            host,
            port,
            {
                "metadata": self._handle_metadata,
                "frame": self._handle_frame,
                "result": self._handle_result,
            },
        )
        self.metadata = ImageMetadata("uint8", 800, 600, "RGB", "planar", "topLeft")
        self._frame_start = 0
        self._frame_lock = threading.Lock()

    def _handle_metadata(self, connection: ServerConnection, body: dict) -> None:
        md = self.metadata
        document = {
            "dataType": md.datatype,
            "width": md.width,
            "height": md.height,
            "colorSpace": md.color_space,
            "layout": md.layout,
            "orientation": md.orientation,
        }
        connection.send(json.dumps(document, separators=(",", ":")).encode())

    def _handle_frame(self, connection: ServerConnection, body: dict) -> None:
        md = self.metadata
        size = md.width * md.height * len(md.color_space)
        # Every frame starts one value higher so consecutive frames differ.
        with self._frame_lock:
            self._frame_start = (self._frame_start + 1) % 256
            start = self._frame_start
        ramp = bytes(range(256)) * ((start + size) // 256 + 1)
        connection.send(ramp[start:start + size])

    def _handle_result(self, connection: ServerConnection, body: dict) -> None:
        print("Received result:\n" + json.dumps(body, separators=(",", ":")))
        # The acknowledgement is sent with its terminating NUL byte.
        connection.send(b"result JSON received\x00")


def main(argv: Optional[list[str]] = None) -> int:
    """Run an IOServer until interrupted."""
    parser = argparse.ArgumentParser(description="Serve generated frames over WebSocket.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=51234)
    args = parser.parse_args(argv)

    with IOServer(args.host, args.port) as server:
        print(f"Serving on {server.host}:{server.port}", flush=True)
        try:
            while True:
                sleep(1)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())