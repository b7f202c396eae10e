"""Command line interface for arcserde."""
