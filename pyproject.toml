[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wordarena"
version = "0.1.0"
description = "Region-based arena allocator with snapshots, rewinds, dynamic arrays, string builders and a small expression parser"
requires-python = ">=3.10"
dependencies = []
keywords = ["arena", "allocator", "region", "memory", "string-builder", "parser"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wordarena-sb-demo = "wordarena.dynarray:main"
wordarena-expr = "wordarena.expr:main"

[tool.hatch.build.targets.wheel]
packages = ["wordarena"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
