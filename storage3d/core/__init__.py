"""Configuration and logging shared by the service."""
