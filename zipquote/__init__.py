"""ZipQuote instant pricing engine.

This package computes home-service price quotes from a ZIP code, a free-text
service description and a job size, using a layered pricebook of geographic
pricing rules and a catalog of per-service rate models.

Architecture:
- Geo Resolver: merges zip → county → msa → state → defaults rule layers
- Service Classifier: maps free text to a canonical service key
- Quote Calculator: applies rules and the service definition, itemizes the quote
- Pricebook Store: loads and atomically swaps pricebook snapshots
"""

__version__ = "1.0.0"
