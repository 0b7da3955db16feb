[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chirpnet"
version = "0.1.0"
description = "A small microblogging backend: user, follow, post and timeline services behind an API gateway, as WSGI applications."
requires-python = ">=3.10"
keywords = ["microblog", "wsgi", "microservices", "timeline", "api-gateway", "werkzeug"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "werkzeug>=2.3",
    "httpx>=0.24",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
chirpnet-users = "chirpnet.users.app:main"
chirpnet-follow = "chirpnet.follow.app:main"
chirpnet-post = "chirpnet.post.app:main"
chirpnet-timeline = "chirpnet.timeline.app:main"
chirpnet-gateway = "chirpnet.gateway:main"

[tool.hatch.build.targets.wheel]
packages = ["chirpnet"]

[tool.hatch.build.targets.sdist]
include = ["chirpnet", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
