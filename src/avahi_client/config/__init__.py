"""Configuration loading and logging setup for avahi_client."""
