#!/usr/bin/env python3
"""
Repository RDF command-line entry point.

Usage:
    repository-rdf load <file.ttl> [--config <config.json>] [--output <out.ttl>]
    repository-rdf namespaces [--config <config.json>]
    repository-rdf workspaces [--config <config.json>]
"""

import logging
import sys
from typing import Dict, List, Optional, Type

from .app.cli.commands import BaseCommand, LoadCommand, NamespacesCommand, WorkspacesCommand
from .app.cli.parsers import create_argument_parser
from .constants import ExitCode
from .core.exceptions import (
    MalformedInput,
    ManagedPropertyViolation,
    RepositoryRdfError,
    StoreOperationFailed,
)

logger = logging.getLogger(__name__)

COMMANDS: Dict[str, Type[BaseCommand]] = {
    'load': LoadCommand,
    'namespaces': NamespacesCommand,
    'workspaces': WorkspacesCommand,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run the command, and map failures to exit codes."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)
    command = COMMANDS[args.command](config_path=args.config)
    
    try:
        return int(command.execute(args))
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.FILE_NOT_FOUND
    except (ValueError, PermissionError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR
    except ManagedPropertyViolation as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.MANAGED_PROPERTY
    except MalformedInput as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return ExitCode.VALIDATION_ERROR
    except StoreOperationFailed as e:
        logger.debug("Repository operation failed", exc_info=True)
        print(f"Repository error: {e}", file=sys.stderr)
        return ExitCode.REPOSITORY_ERROR
    except RepositoryRdfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ExitCode.ERROR


if __name__ == "__main__":
    sys.exit(main())
