"""
Convert annotation results to RDF.
"""

import sys
import uuid
from datetime import datetime
from typing import List
from urllib.parse import quote

from rdflib import Graph, Literal, RDF, URIRef, XSD
from rdflib.namespace import RDFS

from varfeature.analysis.alleles import storage_alleles
from varfeature.core.constants import DEFAULT_BASE_URI
from varfeature.core.models import AnnotationResult
from varfeature.rdf.namespaces import GenomicNamespaces


class RDFConverter:
    """Convert annotation results to RDF."""

    def __init__(self, base_uri=DEFAULT_BASE_URI):
        """
        Initialize the RDF converter.

        Args:
            base_uri: Base URI for the RDF graph
        """
        self.base_uri = base_uri
        self.ns = GenomicNamespaces(base_uri)

    def create_annotation_report(self, results: List[AnnotationResult]) -> Graph:
        """
        Create an RDF graph of annotation results.

        Args:
            results: Annotation results

        Returns:
            RDF graph object
        """
        g = Graph()
        self.ns.bind_to_graph(g)

        report_uri = URIRef(f"{self.base_uri}report/{uuid.uuid4()}")
        g.add((report_uri, RDF.type, self.ns.sio["SequenceVariantAnalysisReport"]))
        g.add((report_uri, self.ns.dc.created, Literal(datetime.now().isoformat(), datatype=XSD.dateTime)))

        for result in results:
            var_uri = self.add_result(g, result)
            g.add((report_uri, self.ns.variant.hasVariant, var_uri))

        return g

    def add_result(self, g: Graph, result: AnnotationResult) -> URIRef:
        """Add one annotation result to a graph and return the variant node."""
        variant = result.variant
        var_id = quote(variant.name or f"unknown_{uuid.uuid4()}", safe='')

        var_uri = URIRef(f"{self.ns.variant}{var_id}")
        g.add((var_uri, RDF.type, self.ns.so["0001060"]))
        g.add((var_uri, RDFS.label, Literal(variant.name or var_id)))
        g.add((var_uri, self.ns.variant.alleleString, Literal(result.allele_string)))
        for allele in storage_alleles(result.allele_string):
            g.add((var_uri, self.ns.variant.allele, Literal(allele)))
        if result.variation_class:
            g.add((var_uri, self.ns.variant.variationClass, self.ns.get_class_term(result.variation_class)))
        if variant.source:
            g.add((var_uri, self.ns.dc.source, Literal(variant.source)))

        # FALDO location
        region_uri = URIRef(f"{self.ns.region}{quote(str(variant.seq_region_name), safe='')}")
        loc_uri = URIRef(f"{self.ns.position}{var_id}")
        g.add((loc_uri, RDF.type, self.ns.faldo.Region))
        g.add((var_uri, self.ns.faldo.location, loc_uri))

        strand_type = self.ns.faldo.ForwardStrandPosition if variant.strand > 0 else self.ns.faldo.ReverseStrandPosition
        for suffix, predicate, position in (('start', self.ns.faldo.begin, variant.start),
                                            ('end', self.ns.faldo.end, variant.end)):
            pos_uri = URIRef(f"{self.ns.position}{var_id}_{suffix}")
            g.add((pos_uri, RDF.type, self.ns.faldo.ExactPosition))
            g.add((pos_uri, RDF.type, strand_type))
            g.add((pos_uri, self.ns.faldo.position, Literal(position, datatype=XSD.integer)))
            g.add((pos_uri, self.ns.faldo.reference, region_uri))
            g.add((loc_uri, predicate, pos_uri))

        for notation in result.notations:
            g.add((var_uri, self.ns.variant.hgvs, Literal(notation.hgvs)))

        for consequence in result.consequences:
            g.add((var_uri, self.ns.variant.hasConsequence, self.ns.get_consequence_term(consequence)))

        for code in sorted(result.qc_failures):
            g.add((var_uri, self.ns.variant.qcFailure, Literal(int(code), datatype=XSD.integer)))

        return var_uri

    def output_report(self, graph: Graph, output=None, format='turtle'):
        """
        Serialize an RDF graph to a file or stdout.

        Args:
            graph: RDF graph object
            output: Output file (default: stdout)
            format: RDF serialization format (default: turtle)
        """
        format_map = {
            'turtle': 'turtle',
            'ttl': 'turtle',
            'n3': 'n3',
            'xml': 'xml',
            'rdfxml': 'xml',
            'json-ld': 'json-ld',
            'jsonld': 'json-ld',
            'nt': 'nt',
            'ntriples': 'nt'
        }
        rdf_format = format_map.get(format.lower(), 'turtle')

        if output:
            graph.serialize(destination=output, format=rdf_format)
        else:
            output_str = graph.serialize(format=rdf_format)
            sys.stdout.write(output_str.decode('utf-8') if isinstance(output_str, bytes) else output_str)
