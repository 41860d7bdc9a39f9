"""HTTP clients for endpoints the chat client talks to."""
from .message_client import MessageUpdateClient, MessageUpdateError, build_message_url

__all__ = ["MessageUpdateClient", "MessageUpdateError", "build_message_url"]
