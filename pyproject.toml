[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "carlink"
version = "0.1.0"
description = "Chassis frame encoding, WIT IMU protocol handling, PID heading control and YOLO detection post-processing for a small robot car"
requires-python = ">=3.10"
keywords = ["robot", "chassis", "imu", "wit", "modbus", "can", "pid", "yolo", "letterbox", "nms"]
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
    "Topic :: Scientific/Engineering :: Interface Engine/Protocol Translator",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["carlink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
