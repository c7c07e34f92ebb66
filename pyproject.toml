[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "huma"
version = "0.1.0"
description = "Building blocks for HTTP APIs: a small router, middleware chains, content formats, cookies, conditional requests and identifier casing."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "api", "router", "middleware", "cookies", "conditional-requests", "casing"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["huma"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
