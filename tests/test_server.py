import json
from unittest import mock

import pytest
from websockets.exceptions import ConnectionClosed
from websockets.sync.client import connect

from framefeed.server import IOServer, Server, main


def _url(server):
    return f"ws://127.0.0.1:{server.port}"


@pytest.fixture
def io_server():
    with IOServer("127.0.0.1", 0) as server:
        yield server


@pytest.fixture
def echo_server():
    def echo(connection, body):
        connection.send(json.dumps(body).encode())

    with Server("127.0.0.1", 0, {"echo": echo}) as server:
        yield server


def test_started_server_has_a_bound_port(io_server):
    assert 0 < io_server.port < 65536


def test_metadata_request(io_server):
    with connect(_url(io_server)) as ws:
        ws.send(json.dumps({"request": "metadata"}))
        reply = json.loads(ws.recv())
    assert reply["dataType"] == "uint8"
    assert reply["width"] == 800
    assert reply["height"] == 600
    assert reply["colorSpace"] == "RGB"
    assert reply["layout"] == "planar"
    assert reply["orientation"] == "topLeft"


def test_metadata_reply_is_binary(io_server):
    with connect(_url(io_server)) as ws:
        ws.send(json.dumps({"request": "metadata"}))
        reply = ws.recv()
    assert isinstance(reply, bytes)
    assert json.loads(reply)["width"] == 800


def test_frame_request_size_and_ramp(io_server):
    with connect(_url(io_server), max_size=None) as ws:
        ws.send(json.dumps({"request": "frame"}))
        frame = ws.recv()
    assert len(frame) == 800 * 600 * 3
    assert frame[0] == 1
    prefix = frame[:1000]
    assert all((b - a) % 256 == 1 for a, b in zip(prefix, prefix[1:]))


def test_consecutive_frames_differ(io_server):
    with connect(_url(io_server), max_size=None) as ws:
        ws.send(json.dumps({"request": "frame"}))
        first = ws.recv()
        ws.send(json.dumps({"request": "frame"}))
        second = ws.recv()
    assert second[0] == (first[0] + 1) % 256
    assert len(first) == len(second)


def test_result_request(io_server, capsys):
    with connect(_url(io_server)) as ws:
        ws.send(json.dumps({"request": "result", "body": {"status": "success"}}))
        reply = ws.recv()
    assert reply == b"result JSON received\x00"
    out = capsys.readouterr().out
    assert "Received result:" in out
    assert '{"status":"success"}' in out


def test_body_is_passed_to_handler(echo_server):
    with connect(_url(echo_server)) as ws:
        ws.send(json.dumps({"request": "echo", "body": {"action": "zoom"}}))
        reply = json.loads(ws.recv())
    assert reply == {"action": "zoom"}


def test_missing_body_gives_empty_dict(echo_server):
    with connect(_url(echo_server)) as ws:
        ws.send(json.dumps({"request": "echo"}))
        reply = json.loads(ws.recv())
    assert reply == {}


def test_unknown_request_ends_session(echo_server, capsys):
    with connect(_url(echo_server)) as ws:
        ws.send(json.dumps({"request": "nonexistent"}))
        with pytest.raises(ConnectionClosed):
            ws.recv()
    assert "Error:" in capsys.readouterr().err


def test_non_object_request_ends_session(echo_server, capsys):
    with connect(_url(echo_server)) as ws:
        ws.send(b"[1, 2]")
        with pytest.raises(ConnectionClosed):
            ws.recv()
    assert "Error:" in capsys.readouterr().err


def test_several_requests_in_one_session(echo_server):
    with connect(_url(echo_server)) as ws:
        replies = []
        for value in ("a", "b", "c"):
            ws.send(json.dumps({"request": "echo", "body": {"v": value}}))
            replies.append(json.loads(ws.recv())["v"])
    assert replies == ["a", "b", "c"]


def test_connection_refused_after_close():
    server = IOServer("127.0.0.1", 0).start()
    assert 0 < server.port < 65536
    url = _url(server)
    server.close()
    with pytest.raises(OSError):
        connect(url, open_timeout=2)


def test_close_ends_open_sessions():
    server = IOServer("127.0.0.1", 0).start()
    ws = connect(_url(server))
    server.close()
    with pytest.raises(ConnectionClosed):
        ws.recv()
    ws.close()


def test_start_twice_is_an_error():
    with IOServer("127.0.0.1", 0) as server:
        with pytest.raises(RuntimeError):
            server.start()


def test_main_runs_until_interrupted(capsys):
    with mock.patch("framefeed.server.sleep", side_effect=KeyboardInterrupt):
        status = main(["--port", "0"])
    assert status == 0
    assert "Serving on 127.0.0.1:" in capsys.readouterr().out