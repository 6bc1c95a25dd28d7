"""Chat messages over the relay."""

from .send_message import send_message

__all__ = ["send_message"]
