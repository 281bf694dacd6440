"""Configuration error taxonomy."""


class ConfigurationError(Exception):
    """Base exception for configuration store errors."""

    pass


class UnknownConfigurationKey(ConfigurationError):
    """Raised when a key has no registered schema type."""

    def __init__(self, key: str):
        super().__init__(f"No configuration registered for key '{key}'")
        self.key = key


class ConfigurationLoadError(ConfigurationError):
    """Raised when persisted configuration data is missing or corrupt."""

    pass


class SchemaMismatchError(ConfigurationError):
    """Raised when a payload cannot be coerced to its registered schema."""

    def __init__(self, schema_name: str, detail: str):
        super().__init__(f"Payload does not match {schema_name}: {detail}")
        self.schema_name = schema_name
        self.detail = detail
