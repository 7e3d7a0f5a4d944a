# framefeed

framefeed defines a small set of interfaces for getting video frames into an
application and sending processing results back out. It also includes three
families of plugins built on those interfaces, plus a WebSocket frame server
and client.

## Core types (`framefeed.core`)

- `ImageMetadata`: data type, width, height, colour space, layout and
  orientation of a frame. `frame_size()` returns the number of bytes a frame
  occupies: width × height × the number of colour channels × the sample size
  (`uint8`/`int8` = 1, `uint16`/`int16` = 2, `float32` = 4).
- `ImageView`: an `ImageMetadata` together with the frame's bytes. It exposes
  the metadata fields as properties.
- `CameraInfo`: `id`, `type`, `name` and `connection` of a camera. `valid()` is
  true when both `id` and `type` are set.
- `VideoSource`: abstract base with `metadata()`, `next_frame()`, `frame()`,
  `copy_frame(buffer)` and `execute(action)`. The default `copy_frame` copies
  the last frame into a writable buffer, returns a view that points at that
  buffer, and raises `ValueError` if the buffer is too small.
- `CameraDiscoverer`: abstract base with `discover()`. Calling the instance
  runs `discover()`.
- `ResultsOutput`: abstract base with `send(metadata, image)`. Calling the
  instance runs `send()`, and `image` may be `None`.
- `VideoSourceStatus` and `VideoSourceError`: when a source cannot deliver a
  frame it raises `VideoSourceError`. The error's `status` attribute holds the
  `VideoSourceStatus`.

## Plugins

Each plugin module has a `plugin_types()` function. It returns a dict that maps
registration names to the plugin classes in that module.

### Empty (`framefeed.empty`)

`EmptyCameraDiscoverer` finds no cameras. `EmptyVideoSource` returns empty
metadata and empty views. `EmptyResultsOutput` discards every result. Use them
as templates or as stand-ins in tests.

### Dummy (`framefeed.dummy`)

`DummyDiscoverer` reports two fake cameras. `DummySource(camera_info, options)`
produces 200×200 planar RGB `uint8` frames that hold a byte ramp wrapping at
256. It prints what it is doing to standard output. `DummyOutput` prints every
result it receives.

```python
from framefeed.dummy import DummyDiscoverer, DummySource

cameras = DummyDiscoverer().discover()
source = DummySource(cameras[0], {})
print(source.metadata())
source.next_frame()
view = source.frame()
buffer = bytearray(source.metadata().frame_size())
copy = source.copy_frame(buffer)
```

### WebSocket (`framefeed.websocket_plugin`)

`WebSocketInput` and `WebSocketOutput` talk to a frame server through a
`framefeed.client.Client`. You can pass a client in; if you don't, they create
one. `WebSocketDiscoverer` reports the configured server as a single camera
with the connection string `host:port`. `WebSocketOutput.send` parses its
metadata argument as a JSON object and forwards it as a result.

## Server address (`framefeed.environment`)

`server_address(environ=None)` returns `(host, port)`. It reads two variables
from the mapping you pass, or from `os.environ` if you pass none:

- `NEURALA_SERVER_IP_ADDRESS` (default `127.0.0.1`)
- `NEURALA_SERVER_PORT` (default `51234`). Only the leading integer is read,
  and the value wraps to 16 bits.

## Protocol

Every request is a JSON object. Its `"request"` member names the request
(`metadata`, `frame`, `execute` or `result`). An optional `"body"` object
carries the arguments. The server answers each request with one message.

## Server (`framefeed.server`)

`Server(host, port, handlers)` dispatches requests to handlers keyed by request
name. Each handler receives the connection and the body, which is an empty dict
when the request has none. `start()` serves in a background thread and
`close()` ends all sessions. The class also works as a context manager. If you
pass port 0, the `port` property reports the port that was actually bound.

`IOServer(host, port)` handles three requests:

- `metadata`: answers with 800×600 planar RGB `uint8`.
- `frame`: answers with a generated frame whose ramp starts one value higher
  each time.
- `result`: prints the body and replies `result JSON received`.

To run it from the command line:

```
framefeed-server --host 127.0.0.1 --port 51234
```

## Client (`framefeed.client`)

`Client(host=None, port=None)` connects to the server and fetches metadata
straight away. If you leave out the host or port, it uses `server_address()`.
When a request fails, the client raises `ClientError`. If the server describes
frames in a pixel format of its own (a `"format"` member), `next_frame()`
raises `VideoSourceError` with `PIXEL_FORMAT_NOT_SUPPORTED`.

```python
from framefeed.client import Client

with Client("127.0.0.1", 51234) as client:
    print(client.metadata())
    client.next_frame()
    print(client.frame_size())
    print(client.send_result({"status": "success"}))
```

## Limitations

framefeed cannot capture from real camera hardware. The only frame producers
are the generated test patterns and a WebSocket server. `plugin_types()` only
lists classes by name, and the package has no loader that finds or loads
plugins on its own.

## Installing

```
pip install framefeed
```

To include the test dependencies, use the `test` extra:
`pip install "framefeed[test]"`.