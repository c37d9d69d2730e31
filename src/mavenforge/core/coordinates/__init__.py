"""Coordinate Canonicalizer and coordinate data models.

All public names are re-exported here so that callers can write
``from mavenforge.core.coordinates import target_label``.
"""

from mavenforge.core.coordinates.canonical import (
    CLASSIFIERS,
    PACKAGING_TYPES,
    STRIPPED_PACKAGING_TYPES,
    escape,
    is_sources_coordinate,
    label_for,
    strip_packaging_and_classifier,
    strip_packaging_classifier_and_version,
    target_label,
    versioned_alias_label,
)
from mavenforge.core.coordinates.models import (
    ArtifactCoordinate,
    ArtifactSpec,
    artifact_label,
    neverlink_set,
)

__all__ = [
    "CLASSIFIERS",
    "PACKAGING_TYPES",
    "STRIPPED_PACKAGING_TYPES",
    "ArtifactCoordinate",
    "ArtifactSpec",
    "artifact_label",
    "escape",
    "is_sources_coordinate",
    "label_for",
    "neverlink_set",
    "strip_packaging_and_classifier",
    "strip_packaging_classifier_and_version",
    "target_label",
    "versioned_alias_label",
]
