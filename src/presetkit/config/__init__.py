"""Configuration layer — settings, TOML discovery, logging setup."""
