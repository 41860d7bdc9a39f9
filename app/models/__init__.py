"""Convenience exports for ORM models."""
from .channel import Channel, ChannelType
from .member import Member, MemberRole
from .message import Message
from .profile import Profile
from .server import Server

__all__ = [
    "Channel",
    "ChannelType",
    "Member",
    "MemberRole",
    "Message",
    "Profile",
    "Server",
]
