"""Pieces shared by every layer: settings, request context, exceptions,
Loguru logging and OpenTelemetry tracing.
"""
