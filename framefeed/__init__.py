"""Video source, camera discoverer and results output interfaces, with plugins and a WebSocket server and client."""

__version__ = "0.1.0"
__all__ = ["core", "empty", "dummy", "environment", "server", "client", "websocket_plugin"]