[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "duplexkit"
version = "0.1.0"
description = "Wire protocol, pixel conversion and H.264 framing helpers for remote desktop streaming"
requires-python = ">=3.10"
dependencies = []
keywords = ["remote-desktop", "h264", "annex-b", "avcc", "nv12", "varint", "wire-protocol"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Multimedia :: Video",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["duplexkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
