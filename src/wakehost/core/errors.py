"""Error kinds raised while waking a host."""


class WakeHostError(Exception):
    """Base class for wakehost errors."""


class InvalidTargetError(WakeHostError):
    """Raised for a malformed or unconfigured wake target."""


class WakeError(WakeHostError):
    """Raised when the magic packet could not be sent."""


class ProbeError(WakeHostError):
    """Raised when the reachability probe itself cannot run."""


class WakeTimeoutError(WakeHostError):
    """Raised when a woken host never answered within the polling budget."""

    def __init__(self, host_address: str, attempts: int, interval_seconds: float) -> None:
        self.host_address = host_address
        self.attempts = attempts
        self.interval_seconds = interval_seconds
        super().__init__(
            f"{host_address} did not respond after {attempts} attempt(s) "
            f"({interval_seconds:g}s apart)"
        )
