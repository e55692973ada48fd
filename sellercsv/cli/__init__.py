"""CLI interface for sellercsv.

This package provides command-line access to the schema registry, the
validator and the batch processor.
"""
