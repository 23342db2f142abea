"""Application layer: command-line interface."""
