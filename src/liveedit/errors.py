"""Exception definitions for liveedit"""


class LiveEditException(Exception):
    """Base exception for all liveedit errors.

    All custom exceptions in liveedit inherit from this class.
    Use this as a catch-all for liveedit-specific errors when you don't need
    to handle specific exception types.
    """

    pass


class ConfigException(LiveEditException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (missing required fields, invalid values)
    """

    pass


class ServiceException(LiveEditException):
    """Raised when a call to the template service fails.

    Use this exception when:
    - A fetch request fails at the transport level
    - The service answers with a 5xx status
    - The response body is not the JSON document the caller expects
    """

    pass


class ClientError(ServiceException):
    """Raised when HTTP 4XX client errors occur and should not be retried.

    Use this exception when:
    - HTTP requests return 4xx status codes (400-499)
    - The access code is missing or rejected
    - Retrying the request would not succeed without changes
    """

    pass


class UnsupportedFieldException(LiveEditException):
    """Raised when no editor exists for a form component type."""

    pass


class SectionNumberParseError(LiveEditException):
    pass
