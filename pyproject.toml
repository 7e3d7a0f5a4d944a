[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "framefeed"
version = "0.1.0"
description = "Video source, camera discoverer and results output interfaces, with empty, dummy and WebSocket plugins and a WebSocket frame server"
requires-python = ">=3.10"
keywords = ["video", "camera", "frames", "websocket", "plugins", "image-processing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Video :: Capture",
]
dependencies = [
    "websockets>=12",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
framefeed-server = "framefeed.server:main"

[tool.hatch.build.targets.wheel]
packages = ["framefeed"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
