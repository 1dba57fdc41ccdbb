# cardano_reputation/errors.py


class ReputationError(Exception):
    """Base error for a reputation request; carries the HTTP status to answer with."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ReputationError):
    """Missing or invalid request fields."""
    status_code = 400


class NotFoundError(ReputationError):
    """The requested account or address does not exist upstream."""
    status_code = 404


class UpstreamError(ReputationError):
    """Blockfrost (or another external call) failed."""
    status_code = 500

    def __init__(self, message, status_code=None, upstream_status=None, body=None):
        super().__init__(message, status_code)
        self.upstream_status = upstream_status
        self.body = body


class StakeAccountNotFoundError(NotFoundError):
    """A stake address the caller asked about is unknown on chain. The only 404 a client sees."""
