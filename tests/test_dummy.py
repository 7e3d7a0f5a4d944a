import pytest

from framefeed.core import CameraInfo, ImageMetadata
from framefeed.dummy import DummyDiscoverer, DummyOutput, DummySource, plugin_types

EXPECTED_METADATA = ImageMetadata("uint8", 200, 200, "RGB", "planar", "topLeft")


@pytest.fixture
def source():
    cameras = DummyDiscoverer()()
    return DummySource(cameras[0])


def test_discover_lists_two_cameras(capsys):
    cameras = DummyDiscoverer().discover()
    assert capsys.readouterr().out == "Discovering available cameras...\n"
    assert cameras == [
        CameraInfo(
            "DummyNativePluginCameraId1",
            "dummyVideoSource",
            "External Dummy Camera #1",
            "DummyNativePluginCameraConnection1",
        ),
        CameraInfo(
            "DummyNativePluginCameraId1",
            "dummyVideoSource",
            "External Dummy Camera #2",
            "DummyNativePluginCameraConnection2",
        ),
    ]
    assert all(camera.valid() for camera in cameras)


def test_source_announces_connection(capsys):
    camera = DummyDiscoverer()()[0]
    capsys.readouterr()
    DummySource(camera, {"fps": "30"})
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == f"Initiating VideoSource connection with {camera}"
    assert lines[1].startswith("With options: ")
    assert "fps" in lines[1]


def test_source_metadata(source):
    assert source.metadata() == EXPECTED_METADATA


def test_next_frame_then_frame_metadata(source):
    assert source.next_frame() is None
    view = source.frame()
    assert view.metadata == EXPECTED_METADATA


def test_frame_is_wrapping_ramp(source):
    data = source.frame().data
    assert len(data) == 200 * 200 * 3
    assert data[:3] == bytes([0, 1, 2])
    assert data[255] == 255
    assert data[256] == 0


def test_copy_frame_fills_buffer(source):
    buffer = bytearray(200 * 200 * 3)
    view = source.copy_frame(buffer)
    assert view.data is buffer
    assert bytes(buffer) == source.frame().data
    assert view.metadata == EXPECTED_METADATA


def test_copy_frame_rejects_small_buffer(source):
    with pytest.raises(ValueError):
        source.copy_frame(bytearray(10))


def test_execute_prints_action(source, capsys):
    capsys.readouterr()
    source.execute("reset")
    assert capsys.readouterr().out == "Executing action: reset\n"


def test_output_prints_result(capsys):
    DummyOutput()('{"status": "success"}', None)
    assert capsys.readouterr().out == 'Received result: {"status": "success"}\n'


def test_plugin_types():
    types = plugin_types()
    assert list(types) == ["dummyDiscoverer", "dummyVideoSource", "dummyOutput"]
    assert types["dummyVideoSource"] is DummySource