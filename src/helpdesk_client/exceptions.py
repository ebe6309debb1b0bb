"""
Exception classes for the helpdesk client.

Every API-level failure, whether simulated in mock mode or received over HTTP,
surfaces as a HelpdeskError carrying the response envelope. ConfigurationError
is kept apart: it signals a programming or setup mistake, not an API failure.
"""
import sys


class ConfigurationError(Exception):
    """Raised when an endpoint definition or the client settings are invalid."""
    def __init__(self, message: str, setting_name: str = None, endpoint: str = None):
        super().__init__(message)
        self.setting_name = setting_name
        self.endpoint = endpoint
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            return executable
        return "unknown command"

    def _generate_guidance(self):
        if self.endpoint:
            return f"""
❌ Endpoint '{self.endpoint}' is misconfigured: {self}
💡 Check the RequestDescriptor declared on the endpoint class
"""
        if self.setting_name:
            command = self._get_current_command()
            return f"""
❌ Setting '{self.setting_name}' is missing or invalid: {self}
💡 Resolve this in one of the following ways:
   1. Export the environment variable before running: {command}
   2. Or add '{self.setting_name}' to config/helpdesk.yaml
"""
        return f"""
❌ Configuration error: {self}
💡 Check your configuration and try again
"""


class HelpdeskError(Exception):
    """Base exception for all API failures.

    Attributes:
        response: The Envelope describing the failed exchange, or None when the
                  transport failed before any response was received.
    """
    def __init__(self, message: str, response=None):
        super().__init__(message)
        self.response = response

    @property
    def status(self):
        return self.response.status if self.response is not None else None

    @property
    def body(self):
        return self.response.body if self.response is not None else None


class NotFoundError(HelpdeskError):
    """Raised when the API answers 404."""
    pass


class InvalidRecordError(HelpdeskError):
    """Raised when the API answers 422."""
    pass


_ERRORS_BY_STATUS = {
    404: NotFoundError,
    422: InvalidRecordError,
}


def error_for_response(response, message: str = None) -> HelpdeskError:
    """Build the HelpdeskError subclass matching the envelope's status."""
    error_class = _ERRORS_BY_STATUS.get(response.status, HelpdeskError)
    if message is None:
        message = f"{response.method.upper()} {response.url} failed with status {response.status}"
    return error_class(message, response=response)
