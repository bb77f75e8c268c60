"""OpenAPI code generator configuration, tag filtering, import mapping and example API services."""

__version__ = "0.1.0"