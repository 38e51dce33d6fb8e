"""Pure domain types and decision tables."""
