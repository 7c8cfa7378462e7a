class DomainError(Exception):
    """Base class for errors the portal reports back to the user."""


class ValidationError(DomainError):
    """Form, scan or filter input that cannot be accepted."""


class AuthenticationError(DomainError):
    """Credentials matched no staff account and no student."""


class SessionParseError(DomainError):
    """The stored session text is not a JSON object."""
