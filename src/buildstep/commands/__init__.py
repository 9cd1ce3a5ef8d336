"""Command implementations for the docker build step."""
