[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mlx42"
version = "0.1.0"
description = "A small image-based window and rendering library with a headless backend and a pygame backend"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["graphics", "rendering", "images", "textures", "xpm42", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mlx42"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
