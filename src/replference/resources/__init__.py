"""Bundled topic data shipped with replference."""
