"""Container settings with environment variable support."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ContainerSettings(BaseSettings):
    """Runtime settings for an application context.

    Every field can be overridden with a ``BEANWIRE_``-prefixed environment
    variable, e.g. ``BEANWIRE_LOG_LEVEL=DEBUG``.

    Attributes:
        log_level: Level passed to ``configure_logging``.
        log_json: Emit JSON log lines instead of console output.
        configure_logging: Whether the context configures logging on refresh.
        destroy_in_reverse_order: Destroy singletons last-created-first.
        register_shutdown_hook: Close the context automatically at interpreter exit.
        url_timeout: Timeout in seconds for URL resources.
    """

    model_config = SettingsConfigDict(env_prefix="BEANWIRE_", extra="ignore")

    log_level: str = Field(default="INFO", description="Log level.")
    log_json: bool = Field(default=False, description="Render logs as JSON.")
    configure_logging: bool = Field(default=False, description="Configure logging on refresh.")
    destroy_in_reverse_order: bool = Field(
        default=True,
        description="Invoke destroy callbacks in reverse registration order.",
    )
    register_shutdown_hook: bool = Field(
        default=False,
        description="Close the context at interpreter exit.",
    )
    url_timeout: float = Field(default=10.0, gt=0, description="HTTP timeout for URL resources.")
