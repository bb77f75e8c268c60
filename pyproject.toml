[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oapigen"
version = "0.1.0"
description = "OpenAPI code generator configuration, tag filtering, import mapping and example API services"
requires-python = ">=3.10"
dependencies = [
    "pyyaml>=6.0",
]
keywords = ["openapi", "swagger", "codegen", "configuration", "wsgi", "api"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[project.scripts]
oapigen-petstore = "oapigen.petstore_app:main"

[tool.hatch.build.targets.wheel]
packages = ["oapigen"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
