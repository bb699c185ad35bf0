"""Structured wire records and the legacy binary archive layouts."""
