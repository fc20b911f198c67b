"""Exception types raised by the stop network."""


class TransportError(Exception):
    """Base exception for stop network failures."""


class DuplicateStopError(TransportError):
    """Raised when a stop with an existing name is added to a network."""


class UnknownStopError(TransportError):
    """Raised when a stop name cannot be resolved in the network."""


class RoutingLoopError(TransportError):
    """Raised when following next hops revisits a stop."""


class ConvergenceError(TransportError):
    """Raised when synchronisation exceeds its configured pass limit."""
