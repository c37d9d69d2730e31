"""Resolution Mode Controller --- live resolution and pinned replay.

Submodules:

- ``resolver``: the external resolver collaborator (``CoursierResolver``).
- ``postprocess``: url/sha256 reconstruction of live output.
- ``pipelines``: ``LivePipeline``, ``PinnedPipeline`` and orchestration.
"""

from mavenforge.core.resolution.pipelines import (
    LivePipeline,
    PinnedPipeline,
    RepositoryOutput,
    ResolutionMode,
    install,
    make_pipeline,
    pin,
    plan_repositories,
    write_repository,
)
from mavenforge.core.resolution.postprocess import (
    normalize_to_unix_path,
    postprocess_tree,
    reconstruct_url,
    relativize_cache_path,
    sha256_file,
)
from mavenforge.core.resolution.resolver import (
    CoursierResolver,
    DependencyResolver,
    ResolveRequest,
)

__all__ = [
    "CoursierResolver",
    "DependencyResolver",
    "LivePipeline",
    "PinnedPipeline",
    "RepositoryOutput",
    "ResolutionMode",
    "ResolveRequest",
    "install",
    "make_pipeline",
    "normalize_to_unix_path",
    "pin",
    "plan_repositories",
    "postprocess_tree",
    "reconstruct_url",
    "relativize_cache_path",
    "sha256_file",
    "write_repository",
]
