"""Shared building blocks: audit events, OTLP/JSON audit logging, key-value storage and utilities."""

__version__ = "0.1.0"