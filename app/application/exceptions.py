class PricingError(RuntimeError):
    """Base class for errors surfaced by the pricing use cases."""

    status_code = 500


class MissingParameterError(PricingError):
    """Raised when a required request parameter is absent."""

    status_code = 400

    def __init__(self, parameter: str, message: str | None = None) -> None:
        self.parameter = parameter
        super().__init__(message or f"{parameter} is required")


class InvalidParameterError(PricingError):
    """Raised when a request parameter cannot be parsed."""

    status_code = 400

    def __init__(self, parameter: str, value: object) -> None:
        self.parameter = parameter
        super().__init__(f"{parameter} is invalid: {value!r}")


class ServiceNotFoundError(PricingError):
    """Raised when the requested service is not in the catalog."""

    status_code = 404

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__("Service not found")


class UpstreamUnavailableError(PricingError):
    """Raised when the pricing data store fails (network errors, bad rows, API errors)."""

    status_code = 500
