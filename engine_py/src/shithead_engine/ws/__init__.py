"""
WebSocket protocol and connection handling for the Shithead game.
"""

from .events import parse_inbound_event

__all__ = ["parse_inbound_event"]
