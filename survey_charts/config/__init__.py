"""Configuration loading (packaged defaults + optional user YAML)."""
