"""Host reachability probe (single ICMP echo via the system ping)."""

import logging
import math
import subprocess
import sys

from wakehost.core.errors import ProbeError

logger = logging.getLogger(__name__)

# Extra wall-clock allowance for the ping process itself to start and exit.
_PROCESS_GRACE = 3.0


def ping_command(host: str, timeout: float = 2.0, platform: str = sys.platform) -> list[str]:
    """
    Build the argv for a single echo request to *host*.

    The wait flag differs per platform: seconds on Linux, milliseconds on
    macOS and Windows.
    """
    millis = str(max(1, int(timeout * 1000)))
    if platform.startswith("win"):
        return ["ping", "-n", "1", "-w", millis, host]
    if platform == "darwin":
        return ["ping", "-c", "1", "-W", millis, host]
    return ["ping", "-c", "1", "-W", str(max(1, math.ceil(timeout))), host]


def is_reachable(host: str, timeout: float = 2.0) -> bool:
    """
    Send one echo probe to *host* and report whether it answered.

    Args:
        host: Hostname or IP address
        timeout: Seconds to wait for the reply (default: 2)

    Returns:
        True if a reply arrived before the timeout, False otherwise

    Raises:
        ProbeError: If the ping binary is not available
    """
    cmd = ping_command(host, timeout)
    logger.debug("Probing %s: %s", host, " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            timeout=timeout + _PROCESS_GRACE,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ProbeError("ping command not found; install iputils-ping (or equivalent)") from exc
    except subprocess.TimeoutExpired:
        logger.debug("Probe of %s hung past %.1fs, treating as unreachable", host, timeout)
        return False
    reachable = result.returncode == 0
    logger.debug("Probe of %s: %s", host, "reply" if reachable else "no reply")
    return reachable
