"""Ensure-awake orchestration: probe, wake, poll."""

import logging
import time
from dataclasses import dataclass

from wakehost.core.errors import WakeTimeoutError
from wakehost.core.probe import is_reachable
from wakehost.core.retry import poll_until
from wakehost.core.target import WaitPolicy, WakeTarget, validate
from wakehost.core.wol import wake

logger = logging.getLogger(__name__)


@dataclass
class WakeOutcome:
    """Result of a successful ensure_awake call."""

    target: WakeTarget
    already_awake: bool
    packet_sent: bool
    attempts: int = 0
    elapsed_seconds: float = 0.0


def wait_until_awake(host_address: str, policy: WaitPolicy) -> int:
    """
    Poll *host_address* until it answers or the policy's attempts run out.

    Args:
        host_address: Hostname or IP address to probe
        policy: Attempt count, interval between attempts and per-probe timeout

    Returns:
        The 1-based attempt on which the host answered

    Raises:
        WakeTimeoutError: If the host never answered
    """

    def _log_attempt(attempt: int, ok: bool) -> None:
        logger.info(
            "Attempt %d/%d: %s %s",
            attempt,
            policy.max_attempts,
            host_address,
            "is awake" if ok else "not responding yet",
        )

    attempt = poll_until(
        lambda: is_reachable(host_address, timeout=policy.probe_timeout),
        attempts=policy.max_attempts,
        interval=policy.interval_seconds,
        sleep=time.sleep,
        on_attempt=_log_attempt,
    )
    if attempt is None:
        logger.warning(
            "%s did not respond within %d attempts", host_address, policy.max_attempts
        )
        raise WakeTimeoutError(host_address, policy.max_attempts, policy.interval_seconds)
    return attempt


def ensure_awake(target: WakeTarget, policy: WaitPolicy = WaitPolicy()) -> WakeOutcome:
    """
    Make sure *target* is up, waking it if necessary.

    Workflow:
        1. Validate the target (no packet is sent for a bad MAC)
        2. Probe once; an already-awake host is left alone
        3. Send the WOL packet
        4. Poll until the host answers or the policy is exhausted

    Raises:
        InvalidTargetError: Malformed or placeholder MAC address
        WakeError: The magic packet could not be sent
        WakeTimeoutError: The host was woken but never answered
        ProbeError: The ping command is unavailable
    """
    validate(target)
    started = time.monotonic()

    logger.info("Checking if %s (%s) is already awake", target.label, target.host_address)
    if is_reachable(target.host_address, timeout=policy.probe_timeout):
        logger.info("%s is already awake, no action needed", target.label)
        return WakeOutcome(
            target=target,
            already_awake=True,
            packet_sent=False,
            elapsed_seconds=time.monotonic() - started,
        )

    logger.info("%s is not responding, sending wake packet", target.label)
    wake(target)

    logger.info(
        "Waiting for %s to wake up (up to %d attempts, %gs apart)",
        target.label,
        policy.max_attempts,
        policy.interval_seconds,
    )
    attempts = wait_until_awake(target.host_address, policy)
    elapsed = time.monotonic() - started
    logger.info("%s is awake after %d attempt(s), %.1fs", target.label, attempts, elapsed)
    return WakeOutcome(
        target=target,
        already_awake=False,
        packet_sent=True,
        attempts=attempts,
        elapsed_seconds=elapsed,
    )
