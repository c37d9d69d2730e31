"""Target declaration models and their Starlark rendering.

Each generated build rule is a frozen dataclass with a ``render()`` method
returning its Starlark text. Rendering is byte-deterministic: attributes are
emitted in a fixed order and dependency lists keep their (already
deduplicated) order.

Example of the declarations emitted for one jar::

    jvm_import(
    	name = "org_hamcrest_hamcrest_library",
    	jars = ["v1/https/repo1.maven.org/maven2/org/hamcrest/hamcrest-library/1.3/hamcrest-library-1.3.jar"],
    	deps = [
    		":org_hamcrest_hamcrest_core",
    	],
    	tags = ["maven_coordinates=org.hamcrest:hamcrest-library:1.3"],
    )
    alias(
    	name = "org_hamcrest_hamcrest_library_1_3",
    	actual = "org_hamcrest_hamcrest_library",
    )
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

# Rule class per supported packaging. jvm_import is a plain Starlark rule that
# skips ijar, which breaks some Scala and Kotlin interface jars.
IMPORT_RULES: dict[str, str] = {
    "jar": "jvm_import",
    "aar": "aar_import",
}

COORDINATES_TAG = "maven_coordinates="
COPY_RULE_SUFFIX = "_extension"


def _label_list(attribute: str, labels: tuple[str, ...]) -> str:
    lines = [f"\t{attribute} = ["]
    lines.extend(f'\t\t":{label}",' for label in labels)
    lines.append("\t],")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# BUILD file declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class JvmImport:
    """Import rule for a materialized jar or aar.

    Attributes:
        name: Target label.
        packaging: ``"jar"`` or ``"aar"``.
        artifact_path: Path of the binary, relative to the repository.
        deps: Target labels of dependencies, unique, without self-edges.
        coordinates: Original resolver coordinate (provenance tag).
        srcjar: Optional path of the source archive.
        neverlink: Compile-time only when True.
    """

    name: str
    packaging: str
    artifact_path: str
    deps: tuple[str, ...] = field(default_factory=tuple)
    coordinates: str = ""
    srcjar: str | None = None
    neverlink: bool = False

    @property
    def rule_class(self) -> str:
        return IMPORT_RULES[self.packaging]

    def render(self) -> str:
        lines = [f"{self.rule_class}(", f'\tname = "{self.name}",']
        if self.packaging == "jar":
            lines.append(f'\tjars = ["{self.artifact_path}"],')
            if self.srcjar is not None:
                lines.append(f'\tsrcjar = "{self.srcjar}",')
        else:
            lines.append(f'\taar = "{self.artifact_path}",')
        lines.append(_label_list("deps", self.deps))
        lines.append(f'\ttags = ["{COORDINATES_TAG}{self.coordinates}"],')
        if self.neverlink:
            lines.append("\tneverlink = True,")
        lines.append(")")
        return "\n".join(lines)


@dataclass(frozen=True)
class JavaLibraryExport:
    """Binary-less library re-exporting a POM-only aggregator's dependencies."""

    name: str
    exports: tuple[str, ...] = field(default_factory=tuple)
    coordinates: str = ""

    @property
    def deps(self) -> tuple[str, ...]:
        return self.exports

    def render(self) -> str:
        return "\n".join([
            "java_library(",
            f'\tname = "{self.name}",',
            _label_list("exports", self.exports),
            f'\ttags = ["{COORDINATES_TAG}{self.coordinates}"],',
            ")",
        ])


@dataclass(frozen=True)
class Alias:
    """Version-qualified alias pointing at a target label."""

    name: str
    actual: str

    def render(self) -> str:
        return f'alias(\n\tname = "{self.name}",\n\tactual = "{self.actual}",\n)'


@dataclass(frozen=True)
class CopyGenrule:
    """Copies a file fetched by an ``http_file`` repository into this one.

    Attributes:
        source_repository: Name of the ``http_file`` repository.
        out: Repository-relative output path (the lockfile ``file``).
    """

    source_repository: str
    out: str

    @property
    def name(self) -> str:
        return self.source_repository + COPY_RULE_SUFFIX

    def render(self) -> str:
        return "\n".join([
            "genrule(",
            f'     name = "{self.name}",',
            f'     srcs = ["@{self.source_repository}//file"],',
            f'     outs = ["{self.out}"],',
            '     cmd = "cp $< $@",',
            ")",
        ])


Declaration = Union[JvmImport, JavaLibraryExport, Alias, CopyGenrule]


# ---------------------------------------------------------------------------
# .bzl macro declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HttpFile:
    """Fetch declaration for one pinned artifact (goes into ``defs.bzl``)."""

    name: str
    url: str
    sha256: str

    def render(self) -> str:
        return "\n".join([
            "    http_file(",
            f'        name = "{self.name}",',
            f'        urls = ["{self.url}"],',
            f'        sha256 = "{self.sha256}",',
            "    )",
        ])


@dataclass(frozen=True)
class CompatRepository:
    """Old-style ``@<label>//jar`` repository aliasing a generated target."""

    name: str
    generating_repository: str

    def render(self) -> str:
        return "\n".join([
            "    compat_repository(",
            f'        name = "{self.name}",',
            f'        generating_repository = "{self.generating_repository}",',
            "    )",
        ])
