"""Shared building blocks for the container: errors, logging and DTOs."""
