"""Custom exceptions for the hardware shop application."""


class ShopError(Exception):
    """Base exception for all application errors."""
    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['error'] = self.message
        rv['status'] = 'error'
        return rv


class ValidationError(ShopError):
    """Malformed or out-of-range client input."""
    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)


class UnauthenticatedError(ShopError):
    """Raised when a request carries no credentials."""
    def __init__(self, message="No token provided"):
        super().__init__(message, 401)


class ForbiddenError(ShopError):
    """Raised for invalid tokens or a role that lacks access."""
    def __init__(self, message="Forbidden"):
        super().__init__(message, 403)


class NotFoundError(ShopError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)


class ConflictError(ShopError):
    """Uniqueness violation or a delete blocked by referencing rows."""
    def __init__(self, message, payload=None):
        super().__init__(message, 409, payload)


class InsufficientStockError(ShopError):
    """Raised when a sale asks for more units than are in stock."""
    def __init__(self, available, requested):
        self.available = int(available)
        self.requested = int(requested)
        message = f"Insufficient stock. Available: {self.available}, Requested: {self.requested}"
        super().__init__(
            message,
            status_code=400,
            payload={'available': self.available, 'requested': self.requested}
        )
