"""Template sources -- stage a history-less template snapshot locally.

Two strategies are available: a depth-1 ``git clone`` and an HTTPS tarball
download.  Both strip version-control metadata before returning.
"""

from rapid_scaffold.config import TemplateConfig
from rapid_scaffold.source.archive import ArchiveTemplateSource, archive_url_for
from rapid_scaffold.source.base import TemplateSource, strip_vcs_metadata
from rapid_scaffold.source.git import GitTemplateSource


def make_source(config: TemplateConfig) -> TemplateSource:
    """Return the template source selected by *config*."""
    if config.strategy == "archive":
        return ArchiveTemplateSource(
            ref=config.ref, archive_url=config.archive_url, timeout=config.timeout
        )
    return GitTemplateSource(ref=config.ref, timeout=config.timeout)


__all__ = [
    "ArchiveTemplateSource",
    "GitTemplateSource",
    "TemplateSource",
    "archive_url_for",
    "make_source",
    "strip_vcs_metadata",
]
