[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termview3d"
version = "0.1.1"
description = "View 3D wireframe models from .obj files interactively in your terminal"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "terminal", "obj", "wavefront", "wireframe", "viewer", "braille"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Viewers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
t3d = "termview3d.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["termview3d"]

[tool.pytest.ini_options]
addopts = "-ra"
