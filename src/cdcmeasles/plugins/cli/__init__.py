"""CLI commands auto-loaded by ``cdcmeasles.cli``."""
