"""Wake target and polling policy value objects."""

import math
import re
from dataclasses import dataclass

from wakehost.core.errors import InvalidTargetError

_MAC_RE = re.compile(r"^([0-9A-Fa-f]{2}[:\-]){5}[0-9A-Fa-f]{2}$")

PLACEHOLDER_MAC = "00:00:00:00:00:00"
DEFAULT_BROADCAST = "255.255.255.255"
DEFAULT_PORT = 9


@dataclass(frozen=True)
class WakeTarget:
    """A machine that can be woken over the LAN."""

    mac_address: str
    host_address: str
    broadcast_address: str = DEFAULT_BROADCAST
    port: int = DEFAULT_PORT
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or self.host_address


@dataclass(frozen=True)
class WaitPolicy:
    """How long to keep probing a host after it was woken.

    The defaults bound the wait to five minutes (30 probes, 10 s apart).
    """

    max_attempts: int = 30
    interval_seconds: float = 10
    probe_timeout: float = 2

    def __post_init__(self) -> None:
        for field in ("interval_seconds", "probe_timeout"):
            if not math.isfinite(getattr(self, field)):
                raise ValueError(f"{field} must be a finite number, got {getattr(self, field)}")
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.interval_seconds < 0:
            raise ValueError(f"interval_seconds must be >= 0, got {self.interval_seconds}")
        if self.probe_timeout <= 0:
            raise ValueError(f"probe_timeout must be > 0, got {self.probe_timeout}")

    @property
    def budget_seconds(self) -> float:
        return self.max_attempts * self.interval_seconds


def normalize_mac(mac: str) -> str:
    """Return *mac* as upper-case, colon-separated octet pairs."""
    return mac.strip().replace("-", ":").upper()


def validate(target: WakeTarget) -> None:
    """
    Check that *target* can be woken.

    Raises:
        InvalidTargetError: If the MAC address is malformed or still the
            all-zero placeholder, or the port is out of range
    """
    mac = target.mac_address.strip()
    if not _MAC_RE.match(mac):
        raise InvalidTargetError(
            f"Invalid MAC address format: {target.mac_address!r} "
            "(expected XX:XX:XX:XX:XX:XX or XX-XX-XX-XX-XX-XX)"
        )
    if normalize_mac(mac) == PLACEHOLDER_MAC:
        raise InvalidTargetError(
            f"MAC address for {target.label} is not configured (still {PLACEHOLDER_MAC})"
        )
    if not 1 <= target.port <= 65535:
        raise InvalidTargetError(f"Invalid WOL port {target.port} for {target.label}")
