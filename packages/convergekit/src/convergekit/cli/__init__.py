"""Command line surface for convergekit."""
