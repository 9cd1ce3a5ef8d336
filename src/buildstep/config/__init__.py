"""Configuration loading for docker-build-step."""
