"""
Load command: write an RDF document into a repository and read it back.

Every triple whose subject lies under the base URI is stored on the node
at the subject's path; rdf:type objects become mixins. The repository is
then serialized back through the properties triple source, which makes the
command a practical round-trip check of the translator.
"""

import argparse
import logging
import sys
from collections import Counter
from pathlib import Path
from typing import Dict

from rdflib import Graph, RDF, URIRef
from tqdm import tqdm

from .base import BaseCommand
from ..helpers import print_summary
from ....constants import ExitCode
from ....core.exceptions import ManagedPropertyViolation
from ....formats.rdf import RepositoryRdfTools
from ....repository import BaseUriIdentifierConverter, InMemorySession


logger = logging.getLogger(__name__)


class LoadCommand(BaseCommand):
    """Load an RDF file into the in-memory repository and print it back."""
    
    def execute(self, args: argparse.Namespace) -> int:
        self.setup_logging_from_config(args)
        
        if not Path(args.input).is_file():
            logger.error(f"Input file not found: {args.input}")
            return ExitCode.FILE_NOT_FOUND
        
        graph = Graph()
        try:
            graph.parse(args.input, format=args.input_format)
        except Exception as e:
            logger.error(f"Invalid RDF in {args.input}: {e}")
            return ExitCode.VALIDATION_ERROR
        
        session, id_converter, tools = self.open_translator(args)
        hints = self._namespace_hints(graph)
        counts = self.load_graph(graph, session, id_converter, tools, hints, skip_managed=args.skip_managed)
        
        print_summary(f"Loaded {args.input}", counts)
        
        output = tools.get_properties_triples(session.get_nodes()).to_graph(
            namespace_registry=session.namespace_registry
        )
        serialized = output.serialize(format=args.output_format)
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(serialized)
            logger.info(f"Wrote {len(output)} triples to {args.output}")
        else:
            sys.stdout.write(serialized)
        return ExitCode.SUCCESS
    
    def _namespace_hints(self, graph: Graph) -> Dict[str, str]:
        """Document prefixes, overridden by configured ones."""
        hints = {str(prefix): str(uri) for prefix, uri in graph.namespaces() if prefix}
        hints.update(self.namespace_hints)
        return hints
    
    @staticmethod
    def load_graph(
        graph: Graph,
        session: InMemorySession,
        id_converter: BaseUriIdentifierConverter,
        tools: RepositoryRdfTools,
        hints: Dict[str, str],
        skip_managed: bool = False,
    ) -> Counter:
        """
        Store the triples of graph in session.
        
        Returns:
            Counts of stored properties, mixins and skipped triples.
        
        Raises:
            ManagedPropertyViolation: On a managed predicate unless skip_managed.
        """
        counts: Counter = Counter()
        for subject, predicate, obj in tqdm(graph, total=len(graph), desc="Loading triples", unit="triple"):
            if not isinstance(subject, URIRef) or not id_converter.in_domain(subject):
                logger.warning(f"Skipping triple with subject outside the repository: {subject}")
                counts["skipped"] += 1
                continue
            path = id_converter.to_path(subject)
            node = session.root_node if path == "/" else session.get_or_add_node(path)
            if predicate == RDF.type and isinstance(obj, URIRef):
                tools.add_mixin(node, obj, hints)
                counts["mixins"] += 1
                continue
            try:
                tools.add_property(node, predicate, obj, hints)
                counts["properties"] += 1
            except ManagedPropertyViolation as e:
                if not skip_managed:
                    raise
                logger.warning(str(e))
                counts["managed"] += 1
        return counts
