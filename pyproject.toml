[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jobboard"
version = "0.1.0"
description = "Domain models, search and vacancy recommendation services and HTTP handlers for a job board"
requires-python = ">=3.10"
dependencies = []
keywords = ["jobs", "vacancies", "search", "recommendations", "resume"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jobboard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
