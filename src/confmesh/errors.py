"""Exceptions raised by the configuration service."""


class ConfigError(Exception):
    """Base class for configuration errors."""


class ProviderLoadError(ConfigError):
    """A provider failed to produce its configuration section.

    The original exception is chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(self, provider_name: str, cause: BaseException):
        self.provider_name = provider_name
        self.cause = cause
        super().__init__(f"Config provider '{provider_name}' failed to load: {cause}")
