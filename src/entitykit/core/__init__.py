"""Core primitives — entity shape, Result, ids, clock, errors, settings."""
