"""MavenForge command-line interface."""
