"""Command-line entrypoints for odsynth."""
