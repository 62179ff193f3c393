[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xgbkit"
version = "0.1.0"
description = "Helpers for X11 clients: rectangles and struts, event queues and dispatch, atom caches, property decoding and BGRA images"
requires-python = ">=3.10"
keywords = ["x11", "xorg", "ewmh", "icccm", "window-manager", "events", "images"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: Desktop Environment :: Window Managers",
    "Typing :: Typed",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["xgbkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
