"""
ragchat Web UI module.

Provides an upload screen that indexes documents and a chat screen that
answers questions from them.
"""

from ragchat.ui.gradio_app import create_app, launch_app
from ragchat.ui.backend import RAGChatBackend, get_backend

__all__ = [
    "create_app",
    "launch_app",
    "RAGChatBackend",
    "get_backend",
]
