"""CLI command modules for multipatch."""
