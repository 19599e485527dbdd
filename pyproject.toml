[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "supbot"
version = "0.6.0"
description = "Chat bot plugin toolkit: plugin SDK and runtime, bundled plugins, a SQLite key-value store, and a plugin registry builder and client"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["chat", "bot", "plugins", "registry", "key-value store"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
supbot-version = "supbot.version:main"

[tool.hatch.build.targets.wheel]
packages = ["supbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
