"""
Constants shared by the translator, the in-memory repository and the CLI:
exit codes, well-known namespace URIs, registry defaults and CLI defaults.
"""

from enum import IntEnum
from typing import Final

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Process exit codes of the repository-rdf command.
    
    VALIDATION_ERROR covers unparseable RDF and malformed triples;
    MANAGED_PROPERTY is returned when a load touches a managed predicate.
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    REPOSITORY_ERROR = 4
    FILE_NOT_FOUND = 5
    MANAGED_PROPERTY = 6


# ============================================================================
# Namespaces
# ============================================================================

class Namespaces:
    """Well-known namespace URIs."""
    
    JCR: Final[str] = "http://www.jcp.org/jcr/1.0"
    """Internal namespace of the structured store."""
    
    NT: Final[str] = "http://www.jcp.org/jcr/nt/1.0"
    """Primary node type namespace of the structured store."""
    
    MIX: Final[str] = "http://www.jcp.org/jcr/mix/1.0"
    """Mixin node type namespace of the structured store."""
    
    XML: Final[str] = "http://www.w3.org/XML/1998/namespace"
    
    REPOSITORY: Final[str] = "http://fedora.info/definitions/v4/repository#"
    """Public RDF namespace for repository-managed terms."""
    
    LDP: Final[str] = "http://www.w3.org/ns/ldp#"
    
    PREMIS: Final[str] = "http://www.loc.gov/premis/rdf/v1#"
    
    VANN: Final[str] = "http://purl.org/vocab/vann/"
    
    VOAF: Final[str] = "http://purl.org/vocommons/voaf#"
    
    DC: Final[str] = "http://purl.org/dc/elements/1.1/"


# ============================================================================
# Registry Configuration
# ============================================================================

class RegistryConfig:
    """Namespace registry and node type defaults."""
    
    GENERATED_PREFIX_TEMPLATE: Final[str] = "ns{:03d}"
    """Template for prefixes allocated by the registry."""
    
    RESERVED_PREFIX_START: Final[str] = "xml"
    """Prefixes beginning with this string cannot be registered."""
    
    RESIDUAL_PROPERTY_NAME: Final[str] = "*"
    """Property definition name that matches any property."""
    
    REFERENCE_PROPERTY_SUFFIX: Final[str] = "_ref"
    """Suffix appended to the stored name of reference properties."""
    
    DEFAULT_PRIMARY_TYPE: Final[str] = "nt:unstructured"
    """Primary type of nodes created without an explicit type."""
    
    DEFAULT_WORKSPACE: Final[str] = "default"
    
    WORKSPACE_PATH_PREFIX: Final[str] = "/workspace:"
    """Path prefix used to build workspace identifiers."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Defaults for the CLI log handlers."""
    
    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    
    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Text format for console and file handlers."""
    
    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    
    MAX_LOG_FILE_MB: Final[int] = 10
    """Size at which the log file is rotated."""
    
    LOG_BACKUP_COUNT: Final[int] = 3


# ============================================================================
# CLI Defaults
# ============================================================================

class CLIDefaults:
    """Defaults used by the command-line interface."""
    
    DEFAULT_BASE_URI: Final[str] = "http://localhost:8080/rest"
    """Base URI used to build external node identifiers."""
    
    DEFAULT_INPUT_FORMAT: Final[str] = "turtle"
    
    DEFAULT_OUTPUT_FORMAT: Final[str] = "turtle"
    
    CONFIG_FILE_NAME: Final[str] = "config.json"
