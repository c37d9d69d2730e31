"""MavenForge: Deterministic build targets from resolved Maven dependency graphs."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "Apache-2.0"

DEFAULT_REPOSITORY_NAME = "maven"
