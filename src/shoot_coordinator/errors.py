"""Error taxonomy shared by services, adapters and the HTTP layer."""


class ValidationError(ValueError):
    """Input rejected before any write reaches the data store."""


class BackendError(RuntimeError):
    """The data store, identity provider or SMS provider failed a request."""


class AuthorizationError(PermissionError):
    """The signed-in identity may not perform the requested action."""


class NotFoundError(LookupError):
    """A referenced record does not exist."""


class AuthenticationError(PermissionError):
    """Credentials or bearer token could not be verified."""
