"""Adapters for the process environment and the Akita backend."""
