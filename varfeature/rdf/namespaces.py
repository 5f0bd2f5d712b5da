"""
Namespaces and Sequence Ontology terms for annotation RDF.
"""

from rdflib import Namespace, RDF, XSD
from rdflib.namespace import RDFS

from varfeature.core.consequences import ConsequenceType
from varfeature.core.constants import DEFAULT_BASE_URI


# Consequence types to Sequence Ontology terms
CONSEQUENCE_SO_TERMS = {
    ConsequenceType.ESSENTIAL_SPLICE_SITE: "0001629",  # splice_site_variant
    ConsequenceType.STOP_GAINED: "0001587",            # stop_gained
    ConsequenceType.STOP_LOST: "0001578",              # stop_lost
    ConsequenceType.FRAMESHIFT_CODING: "0001589",      # frameshift_variant
    ConsequenceType.NON_SYNONYMOUS_CODING: "0001583",  # missense_variant
    ConsequenceType.SPLICE_SITE: "0001630",            # splice_region_variant
    ConsequenceType.SYNONYMOUS_CODING: "0001819",      # synonymous_variant
    ConsequenceType.REGULATORY_REGION: "0001566",      # regulatory_region_variant
    ConsequenceType.FIVE_PRIME_UTR: "0001623",         # 5_prime_UTR_variant
    ConsequenceType.THREE_PRIME_UTR: "0001624",        # 3_prime_UTR_variant
    ConsequenceType.INTRONIC: "0001627",               # intron_variant
    ConsequenceType.UPSTREAM: "0001631",               # upstream_gene_variant
    ConsequenceType.DOWNSTREAM: "0001632",             # downstream_gene_variant
    ConsequenceType.INTERGENIC: "0001628",             # intergenic_variant
}

# Variation classes to Sequence Ontology terms
VARIATION_CLASS_SO_TERMS = {
    "snp": "0001483",           # SNV
    "in-del": "1000032",        # delins
    "substitution": "1000002",  # substitution
    "microsat": "0000289",      # microsatellite
    "mixed": "0001059",         # sequence_alteration
    "named": "0001059",
    "cnv": "0001019",           # copy_number_variation
}


class GenomicNamespaces:
    """Provides standard namespaces for genomic data in RDF."""

    def __init__(self, base_uri=DEFAULT_BASE_URI):
        self.base = Namespace(base_uri)

        self.rdf = RDF
        self.rdfs = RDFS
        self.xsd = XSD

        # Genomic ontologies
        self.faldo = Namespace("http://biohackathon.org/resource/faldo#")
        self.so = Namespace("http://purl.obolibrary.org/obo/SO_")
        self.dc = Namespace("http://purl.org/dc/terms/")
        self.sio = Namespace("http://semanticscience.org/resource/")

        # Annotation terms
        self.variant = Namespace(f"{base_uri}variant/")
        self.region = Namespace(f"{base_uri}region/")
        self.position = Namespace(f"{base_uri}position/")

    def bind_to_graph(self, g):
        """Bind all namespaces to a graph."""
        g.bind("rdf", self.rdf)
        g.bind("rdfs", self.rdfs)
        g.bind("xsd", self.xsd)
        g.bind("faldo", self.faldo)
        g.bind("so", self.so)
        g.bind("dc", self.dc)
        g.bind("sio", self.sio)
        g.bind("variant", self.variant)
        g.bind("region", self.region)
        g.bind("position", self.position)
        g.bind("base", self.base)

    def get_consequence_term(self, consequence):
        """Map a consequence type to its Sequence Ontology term."""
        return self.so[CONSEQUENCE_SO_TERMS.get(consequence, "0001060")]  # sequence_variant as default

    def get_class_term(self, variation_class):
        """Map a variation class to its Sequence Ontology term."""
        return self.so[VARIATION_CLASS_SO_TERMS.get(variation_class, "0001059")]
