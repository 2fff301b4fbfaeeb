"""Helpers for REST API client SDKs: date-times, responses, file metadata, gzip and CP4D auth."""

__version__ = "5.0.0"