"""Lockfile --- reproducible, resolver-free repository regeneration.

The package is split into focused submodules:

- ``lockfile``: The ``Lockfile`` class with serialization.
- ``operations``: Deserialization (``from_dict``, ``from_json``, ``read``),
  validation, and diffing.
- ``factory``: ``from_resolution`` plus the ``unpinned_`` naming helpers.

All public names are re-exported here so that imports like
``from mavenforge.core.lockfile import Lockfile`` work.
"""

from mavenforge.core.lockfile.lockfile import DEFAULT_LOCKFILE_NAME, Lockfile

# Attach operations to Lockfile as methods/classmethods
from mavenforge.core.lockfile import operations as _ops
from mavenforge.core.lockfile import factory as _factory
from mavenforge.core.lockfile.factory import UNPINNED_PREFIX, pin_name, unpinned_name

Lockfile.from_dict = classmethod(_ops._from_dict)
Lockfile.from_json = classmethod(_ops._from_json)
Lockfile.read = classmethod(_ops._read)
Lockfile.validate = _ops._validate
Lockfile.diff = _ops._diff
Lockfile.from_resolution = classmethod(_factory._from_resolution)

__all__ = [
    "DEFAULT_LOCKFILE_NAME",
    "UNPINNED_PREFIX",
    "Lockfile",
    "pin_name",
    "unpinned_name",
]
