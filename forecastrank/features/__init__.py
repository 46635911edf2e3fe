"""Feature slices of the analysis engine."""
