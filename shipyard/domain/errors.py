"""
Domain Errors

Architectural Intent:
- Single exception hierarchy for every lifecycle operation
- An operation either returns normally or raises exactly one ShipyardError
- Adapters translate library exceptions (paramiko, invoke, OSError) into these
"""

from typing import Optional


class ShipyardError(Exception):
    pass


class ConnectivityTimeoutError(ShipyardError):
    def __init__(self, address: str) -> None:
        super().__init__(f"timeout exceeded - unable to connect to: {address}")
        self.address = address


class OperationTimeoutError(ShipyardError):
    def __init__(self, operation: str, address: str, seconds: float) -> None:
        super().__init__(
            f"{operation} on {address} did not finish within {seconds:g}s"
        )
        self.operation = operation
        self.address = address
        self.seconds = seconds


class TransportError(ShipyardError):
    def __init__(
        self,
        message: str,
        address: Optional[str] = None,
        command: Optional[str] = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.address = address
        self.command = command
        self.output = output


class UnsupportedPlatformError(ShipyardError):
    def __init__(self, platform: str) -> None:
        super().__init__(f"Unsupported platform: {platform!r}")
        self.platform = platform


class BuildError(ShipyardError):
    pass
