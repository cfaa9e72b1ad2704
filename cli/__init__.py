"""Command-line entry points for the battery voltage monitor."""
