"""Relay error taxonomy.

Every error carries the HTTP status it maps to; the API layer turns them into
responses.
"""


class RelayError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(RelayError):
    """Raised when required request fields are missing or malformed."""

    status_code = 400


class NotSponsoredError(RelayError):
    """Raised when a transaction targets an address that is not sponsored."""

    status_code = 400

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Address {address} is not sponsored, please add it to the list")


class DuplicateSponsorshipError(RelayError):
    """Raised when registering an address that is already sponsored."""

    status_code = 400

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Address {address} is already sponsored")


class UpstreamError(RelayError):
    """Wraps failures from the datastore, RPC provider or Cometh API."""

    status_code = 500


class AuthenticationError(RelayError):
    """Raised when an admin-only route is called without the admin token."""

    status_code = 401
