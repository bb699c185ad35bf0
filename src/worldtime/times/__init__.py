"""Microsecond-precision instants and durations bound to a location's timezone."""
