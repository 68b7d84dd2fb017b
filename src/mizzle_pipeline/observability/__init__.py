"""Observability – structured logging for the pipeline."""
