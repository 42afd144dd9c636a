"""
Domain error taxonomy.

Each error carries the HTTP status the API layer surfaces it with.
"""


class DomainError(ValueError):
    """Base class for expected, caller-visible failures"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Entity id + user id pair does not exist"""
    status_code = 404

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransaction(DomainError):
    """Transaction would break the holding's invariants"""


class InvalidContribution(DomainError):
    """Contribution amount is not positive"""


class InactiveGoalError(DomainError):
    """Contribution to a goal that is not active"""


class ConflictError(DomainError):
    """Persisted uniqueness constraint violated"""
    status_code = 409


class MarketDataUnavailable(DomainError):
    """No market-data provider could serve the request"""
    status_code = 503
