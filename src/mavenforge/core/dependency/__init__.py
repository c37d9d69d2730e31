"""Dependency tree model shared by the resolver, the lockfile and the compiler."""

from mavenforge.core.dependency.tree import DependencyTree, ResolvedArtifact

__all__ = ["DependencyTree", "ResolvedArtifact"]
