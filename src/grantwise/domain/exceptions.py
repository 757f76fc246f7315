"""Domain exceptions."""


class GrantwiseError(Exception):
    """Base exception for grantwise."""

    pass


class ValidationError(GrantwiseError):
    """Validation failed for input data. Raised before any store write."""

    pass


class NotFound(GrantwiseError):
    """Requested record was not found."""

    def __init__(self, kind: str, identifier: object) -> None:
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} not found: {identifier}")


class AlreadyExists(GrantwiseError):
    """A catalog record with the same unique name already exists."""

    pass


class StoreError(GrantwiseError):
    """The underlying grant store failed. Callers decide whether to retry."""

    pass
