"""
CLI commands.
"""

from .base import BaseCommand
from .load import LoadCommand
from .describe import NamespacesCommand, WorkspacesCommand

__all__ = [
    "BaseCommand",
    "LoadCommand",
    "NamespacesCommand",
    "WorkspacesCommand",
]
