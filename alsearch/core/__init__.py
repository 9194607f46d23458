"""Core module for configuration, logging, tracing and library exceptions.

Patterns applied:
- Pydantic Settings with SettingsConfigDict
- One-time structlog / OpenTelemetry configuration
- Custom namespaced exceptions
"""
