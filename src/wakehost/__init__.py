"""wakehost: wake a home-lab machine over the LAN and wait until it answers."""

__version__ = "1.0.0"
