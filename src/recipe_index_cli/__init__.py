"""Command line entry point for the recipe index builder."""
