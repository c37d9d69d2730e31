"""Artifacts known to be published as a POM only.

Such artifacts aggregate their dependencies and have no jar to download, so
the resolver reports them with ``"file": null``. Keys are versionless
``group:artifact`` pairs. Configurations may extend the set through
``pom_only_artifacts``.
"""

from __future__ import annotations

POM_ONLY_ARTIFACTS: frozenset[str] = frozenset({
    "org.apache.arrow:arrow-memory",
})
