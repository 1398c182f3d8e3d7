"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    A service owns the rules of one component (reactions, flags, comments,
    views) and talks to storage only through repository interfaces.
    """

    pass
