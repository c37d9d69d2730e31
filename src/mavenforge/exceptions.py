"""MavenForge exception hierarchy.

All public exceptions inherit from MavenForgeError, giving callers a single
base class to catch when they want to handle any MavenForge-specific failure
without swallowing unrelated errors. Every one of them is fatal for the
repository being generated: no partially-correct BUILD file is ever written.
"""

from __future__ import annotations


class MavenForgeError(Exception):
    """Base exception for all MavenForge errors."""


class ConfigurationError(MavenForgeError):
    """Raised when a ``maven_install`` configuration is invalid.

    Covers missing required fields, unknown policy values, and a pinned
    repository requested without a lockfile. Raised before any resolver or
    lockfile I/O is attempted.
    """


class ResolverInvocationError(MavenForgeError):
    """Raised when the external resolver exits with a non-zero status.

    The resolver's raw stderr is kept on ``stderr`` and included in the
    message.
    """

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message + stderr)
        self.stderr = stderr


class UnsupportedTransportError(MavenForgeError):
    """Raised when a materialized artifact was not fetched over http(s)."""

    def __init__(self, coord: str) -> None:
        super().__init__(
            f"Only artifacts downloaded over http(s) are supported: {coord}"
        )
        self.coord = coord


class MissingArtifactError(MavenForgeError):
    """Raised when an artifact has no file and is not a POM-only aggregator.

    Attributes:
        coord: The coordinate of the artifact that was not downloaded.
        reverse_dependents: Coordinates of the tree entries that depend on
            ``coord``. Empty when nothing references it.
    """

    def __init__(
        self, message: str, coord: str, reverse_dependents: list[str]
    ) -> None:
        super().__init__(message)
        self.coord = coord
        self.reverse_dependents = reverse_dependents


class UnrecognizedPackagingError(MavenForgeError):
    """Raised when a materialized file has no known import strategy."""

    def __init__(self, message: str, coord: str) -> None:
        super().__init__(message)
        self.coord = coord


class LockfileError(MavenForgeError):
    """Raised for lockfile loading or integrity failures."""


class LockfileCorruptError(LockfileError):
    """Raised when the lockfile content is not parseable JSON."""


class LockfileSchemaError(LockfileError):
    """Raised when the lockfile parses but has no dependency tree."""
