[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "usdviewkit"
version = "0.2.0"
description = "Scene, camera and stage-loading logic for a USD viewport"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["usd", "viewport", "camera", "3d", "scene", "picking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["usdviewkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
