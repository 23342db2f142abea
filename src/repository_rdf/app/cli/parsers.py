"""
CLI argument parser configuration.

Command Structure:
    - load <file>     Load RDF into a repository and print it back
    - namespaces      Print registered namespaces as RDF
    - workspaces      Print workspaces as RDF
"""

import argparse

from ...constants import CLIDefaults


def add_common_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags shared by every command."""
    parser.add_argument(
        '--config', '-c',
        help='Path to configuration file (default: ./config.json if present)'
    )
    parser.add_argument(
        '--base-uri',
        help=f'Base URI for node identifiers (default: {CLIDefaults.DEFAULT_BASE_URI})'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Override the configured log level'
    )
    parser.add_argument(
        '--output-format',
        default=CLIDefaults.DEFAULT_OUTPUT_FORMAT,
        help='rdflib serialization format for output (default: turtle)'
    )


def create_argument_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='repository-rdf',
        description='Translate between repository nodes and RDF',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)
    
    load_parser = subparsers.add_parser('load', help='Load RDF into a repository and print it back')
    load_parser.add_argument('input', help='RDF file to load')
    load_parser.add_argument(
        '--input-format',
        default=CLIDefaults.DEFAULT_INPUT_FORMAT,
        help='rdflib parser format of the input (default: turtle)'
    )
    load_parser.add_argument('--output', '-o', help='Output file (default: stdout)')
    load_parser.add_argument(
        '--skip-managed',
        action='store_true',
        help='Skip triples with repository-managed predicates instead of failing'
    )
    add_common_flags(load_parser)
    
    namespaces_parser = subparsers.add_parser('namespaces', help='Print registered namespaces as RDF')
    add_common_flags(namespaces_parser)
    
    workspaces_parser = subparsers.add_parser('workspaces', help='Print workspaces as RDF')
    add_common_flags(workspaces_parser)
    
    return parser
