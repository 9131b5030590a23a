"""Core launcher logic: configuration, terminal launching and services."""
