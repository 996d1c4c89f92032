class ConfigurationError(Exception):
    """Raised when a required configuration value is missing or invalid."""
