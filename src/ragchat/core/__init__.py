"""
Core chat types.
"""

from ragchat.core.message import Message, Role

__all__ = [
    "Message",
    "Role",
]
