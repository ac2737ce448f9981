"""Core types: clock protocol, time values, errors."""
