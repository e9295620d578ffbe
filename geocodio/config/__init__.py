"""Configuration and logging helpers for the geocodio client."""
