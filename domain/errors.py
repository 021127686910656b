"""
Configurator Errors

Every failure the core surfaces to the UI is one of these kinds. Each carries
a ``user_message`` that pages can show as-is.
"""


class ConfiguratorError(Exception):
    """Base class for failures surfaced to the UI layer."""

    user_message = "Something went wrong."

    def __init__(self, detail: str = "", user_message: str | None = None):
        super().__init__(detail or self.user_message)
        if user_message is not None:
            self.user_message = user_message


class InvalidKey(ConfiguratorError, ValueError):
    """A model key, paint color or trim slot outside its fixed domain."""

    user_message = "That option is not available. Please pick one from the list."


class Unauthenticated(ConfiguratorError):
    """A save was attempted without a resolved principal."""

    user_message = "Please sign in first!"


class StoreUnavailable(ConfiguratorError):
    """The document store call failed."""

    user_message = "The garage is unreachable right now. Please try again."


class StoreTimeout(ConfiguratorError):
    """The document store did not answer within the configured timeout."""

    user_message = StoreUnavailable.user_message


STORE_ERRORS = (StoreUnavailable, StoreTimeout)
