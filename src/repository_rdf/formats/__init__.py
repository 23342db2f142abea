"""Format-specific translation components."""
