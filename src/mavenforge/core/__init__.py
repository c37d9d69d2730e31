"""Core graph compilation and resolution modules for MavenForge."""
