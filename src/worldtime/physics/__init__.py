"""Astronomical algorithms used to derive apparent solar time.

These algorithms are "general" in that they only depend on calendar dates and coordinates, not on
the time types built on top of them.
"""
