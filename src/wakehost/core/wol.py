"""Wake-on-LAN functionality."""

import logging

from wakeonlan import create_magic_packet, send_magic_packet

from wakehost.core.errors import WakeError
from wakehost.core.target import WakeTarget, normalize_mac

logger = logging.getLogger(__name__)


def magic_packet(mac_address: str) -> bytes:
    """
    Build the magic packet payload for *mac_address*.

    Six 0xFF bytes followed by the hardware address repeated sixteen times
    (102 bytes).
    """
    return create_magic_packet(normalize_mac(mac_address))


def wake(target: WakeTarget) -> None:
    """
    Send a Wake-on-LAN magic packet to wake a remote machine.

    Args:
        target: Machine to wake; the packet goes to its broadcast address and port

    Raises:
        WakeError: If the datagram could not be sent (no route, permission denied, ...)
    """
    mac = normalize_mac(target.mac_address)
    logger.info(
        "Sending WOL magic packet to %s via %s:%d", mac, target.broadcast_address, target.port
    )
    try:
        send_magic_packet(mac, ip_address=target.broadcast_address, port=target.port)
    except OSError as exc:
        raise WakeError(
            f"Failed to send WOL packet to {mac} via "
            f"{target.broadcast_address}:{target.port}: {exc}"
        ) from exc
    logger.debug("WOL packet sent successfully")
