"""Coordinate canonicalization --- build-target names from Maven coordinates.

Every other component funnels raw resolver coordinates through this module
to obtain two identifiers:

- the **target label**: packaging, classifier and version removed, then
  escaped (``org.hamcrest:hamcrest-core:1.3`` -> ``org_hamcrest_hamcrest_core``);
- the **versioned alias label**: only packaging and classifier removed,
  then escaped (-> ``org_hamcrest_hamcrest_core_1_3``).

The rules are kept as lookup tables plus an ordered substitution list so that
the canonicalization stays auditable. All functions are pure and total:
unrecognized packaging types pass through untouched and are rejected later
by the graph compiler.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

# The resolver uses these types to decide which files it resolves and fetches.
# Some jars are published with e.g. "eclipse-plugin" and would be skipped if
# that type were not requested.
PACKAGING_TYPES: tuple[str, ...] = (
    "jar",
    "aar",
    "bundle",
    "eclipse-plugin",
    "orbit",
    "test-jar",
)

# "pom" is never requested from the resolver but shows up inside coordinates.
STRIPPED_PACKAGING_TYPES: tuple[str, ...] = PACKAGING_TYPES + ("pom",)

CLASSIFIERS: tuple[str, ...] = ("sources", "natives")

SOURCES_INFIX = ":sources:"

_ESCAPED_CHARACTERS: tuple[str, ...] = (".", "-", ":", "/", "+")
_SEPARATOR = "_"


# ---------------------------------------------------------------------------
# Stripping and escaping
# ---------------------------------------------------------------------------


def strip_packaging_and_classifier(coord: str) -> str:
    """Remove recognized ``:packaging:`` and ``:classifier:`` infixes.

    Args:
        coord: A resolver coordinate such as ``g:a:aar:1.0`` or
            ``g:a:jar:sources:1.0``.

    Returns:
        The coordinate with the infixes collapsed to ``:`` (``g:a:1.0``).
    """
    for packaging_type in STRIPPED_PACKAGING_TYPES:
        coord = coord.replace(f":{packaging_type}:", ":")
    for classifier in CLASSIFIERS:
        coord = coord.replace(f":{classifier}:", ":")
    return coord


def strip_packaging_classifier_and_version(coord: str) -> str:
    """Reduce a coordinate to its versionless ``group:artifact`` form."""
    return ":".join(strip_packaging_and_classifier(coord).split(":")[:-1])


def escape(text: str) -> str:
    """Escape a (stripped) coordinate into a safe target identifier.

    ``. - : / +`` all become ``_``; version-range brackets are dropped and
    anything from the first ``,`` on is truncated, so ``[1.0,2.0)`` style
    ranges collapse to their lower bound.
    """
    for char in _ESCAPED_CHARACTERS:
        text = text.replace(char, _SEPARATOR)
    return text.replace("[", "").replace("]", "").split(",")[0]


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def label_for(coord: str, strip_version: bool) -> str:
    """Canonicalize a coordinate into a target or versioned alias label.

    Args:
        coord: Raw coordinate string as emitted by the resolver.
        strip_version: True for the target label, False for the versioned
            alias label.

    Returns:
        The escaped identifier.
    """
    if strip_version:
        return escape(strip_packaging_classifier_and_version(coord))
    return escape(strip_packaging_and_classifier(coord))


def target_label(coord: str) -> str:
    """Return the versionless target label for ``coord``."""
    return label_for(coord, strip_version=True)


def versioned_alias_label(coord: str) -> str:
    """Return the version-qualified alias label for ``coord``."""
    return label_for(coord, strip_version=False)


def is_sources_coordinate(coord: str) -> bool:
    """True if the coordinate carries the ``sources`` classifier."""
    return SOURCES_INFIX in coord
