"""Shared models and protocols used across the translator."""
