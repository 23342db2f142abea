"""
Command-line interface.
"""

from .parsers import create_argument_parser
from .helpers import setup_logging, load_config

__all__ = ["create_argument_parser", "setup_logging", "load_config"]
