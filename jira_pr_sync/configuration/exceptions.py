"""Contains exceptions raised when reconciling application configuration."""


class ConfigError(Exception):
    """Raised when the action's configuration is missing or invalid."""

    pass


class RequiredConfigurationElementError(ConfigError):
    """Raised when a required configuration element is missing."""

    def __init__(self, name: str, cli_name: str, env_name: str) -> None:
        """Initializes the exception with the name of the missing element."""
        super().__init__(f"Input required and not supplied: {name} (command line option {cli_name}, environment variable {env_name})")
        self.name = name
        self.cli_name = cli_name
        self.env_name = env_name


class InvalidConfigurationElementError(ConfigError):
    """Raised when a configuration element is present but has an unusable value."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        """Initializes the exception with the name and value of the invalid element."""
        super().__init__(f"Invalid value for {name}: {value!r} ({reason})")
        self.name = name
        self.value = value
        self.reason = reason
