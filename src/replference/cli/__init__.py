"""Command-line surface for replference."""
