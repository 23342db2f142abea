"""
Base command class.

All CLI commands inherit from BaseCommand, which provides lazy
configuration loading, logging setup and construction of the in-memory
repository and translator the commands operate on.
"""

import argparse
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..helpers import (
    load_config,
    get_default_config_path,
    setup_logging,
)
from ....constants import CLIDefaults, RegistryConfig
from ....formats.rdf import RepositoryRdfTools
from ....repository import BaseUriIdentifierConverter, InMemoryRepository, InMemorySession


logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """
    Base class for CLI commands.
    
    Subclasses implement execute() and return an exit code.
    """
    
    def __init__(
        self,
        config_path: Optional[str] = None,
        repository: Optional[InMemoryRepository] = None,
    ):
        """
        Initialize the command.
        
        Args:
            config_path: Path to configuration file.
            repository: Optional repository instance (for dependency injection).
        """
        self.config_path = config_path or get_default_config_path()
        self._explicit_config = config_path is not None
        self._repository = repository
        self._config: Optional[Dict[str, Any]] = None
    
    @property
    def config(self) -> Dict[str, Any]:
        """Lazy-load configuration; an absent default config file means no configuration."""
        if self._config is None:
            if not self._explicit_config and not Path(self.config_path).exists():
                self._config = {}
            else:
                self._config = load_config(self.config_path)
        return self._config
    
    @property
    def namespace_hints(self) -> Dict[str, str]:
        return dict(self.config.get('namespaces', {}))
    
    def base_uri(self, args: argparse.Namespace) -> str:
        return getattr(args, 'base_uri', None) or self.config.get('base_uri', CLIDefaults.DEFAULT_BASE_URI)
    
    def get_repository(self) -> InMemoryRepository:
        """Get or create the repository, with the configured workspaces."""
        if self._repository is None:
            workspaces = self.config.get('workspaces') or [RegistryConfig.DEFAULT_WORKSPACE]
            if RegistryConfig.DEFAULT_WORKSPACE not in workspaces:
                workspaces = [RegistryConfig.DEFAULT_WORKSPACE] + list(workspaces)
            self._repository = InMemoryRepository(workspaces=workspaces)
        return self._repository
    
    def open_translator(
        self,
        args: argparse.Namespace,
    ) -> Tuple[InMemorySession, BaseUriIdentifierConverter, RepositoryRdfTools]:
        """Log in to the default workspace and bind a translator to the session."""
        session = self.get_repository().login()
        id_converter = BaseUriIdentifierConverter(session, self.base_uri(args))
        return session, id_converter, RepositoryRdfTools.with_context(id_converter, session)
    
    def setup_logging_from_config(self, args: Optional[argparse.Namespace] = None) -> None:
        """Setup logging from the config's 'logging' section and CLI overrides."""
        log_config: Dict[str, Any] = dict(self.config.get('logging', {}))
        if args is not None and getattr(args, 'log_level', None):
            log_config['level'] = args.log_level
        setup_logging(config=log_config)
    
    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """
        Execute the command.
        
        Args:
            args: Parsed command-line arguments.
            
        Returns:
            Exit code (0 for success, non-zero for error).
        """
        pass
