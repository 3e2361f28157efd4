
class FieldCheckUpstreamError(RuntimeError):
    """Raised when an async field check cannot reach its backing service (timeouts, network errors)."""
    pass


class FieldCheckContractError(RuntimeError):
    """Raised when an async field check backend answers with a malformed body."""
    pass
