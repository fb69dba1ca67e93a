"""ZeroMQ bridge transport."""

from .bridge import Bridge
