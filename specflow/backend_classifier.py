"""
Backend Classifier

Classifies a git remote URL into the issue-tracking backend used for the
repository: Jira for organization repositories and generic corporate hosts,
GitHub Issues for personal GitHub repositories.
"""

import logging
import subprocess
from typing import Callable, Iterable, Optional, Sequence, Tuple

from .models import BackendDetection, TrackingBackend

logger = logging.getLogger(__name__)

DEFAULT_ORG_PATTERNS: Tuple[str, ...] = ("wiliot", "Wiliot", "wiliot-com")
GITHUB_MARKERS: Tuple[str, ...] = ("github.com", "github-")
CORPORATE_MARKERS: Tuple[str, ...] = ("gitlab", "bitbucket")

UsernameProvider = Callable[[], Optional[str]]


def _matches_any(remote_url: str, patterns: Iterable[str]) -> bool:
    return any(pattern and pattern in remote_url for pattern in patterns)


def resolve_personal_patterns(
    configured: Optional[Sequence[str]],
    username_provider: Optional[UsernameProvider] = None,
) -> Tuple[str, ...]:
    """Determine the personal-account patterns to classify with.

    Explicitly configured patterns win. Otherwise the injected provider (for
    example one asking ``gh`` for the logged-in user) supplies a single pattern.

    Args:
        configured: Patterns from configuration or the environment
        username_provider: Callable returning the authenticated username, or None

    Returns:
        Tuple of personal patterns (possibly empty)
    """
    patterns = tuple(p for p in (configured or ()) if p)
    if patterns or username_provider is None:
        return patterns

    try:
        username = username_provider()
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("Could not determine authenticated username: %s", e)
        return ()

    return (username,) if username else ()


class BackendClassifier:
    """Stateless classifier mapping remote URLs to tracking backends."""

    def __init__(self, org_patterns: Sequence[str] = DEFAULT_ORG_PATTERNS) -> None:
        """Initialize backend classifier.

        Args:
            org_patterns: Organization identifiers whose repositories use Jira
        """
        self.org_patterns = tuple(org_patterns)

    def classify(
        self,
        remote_url: Optional[str],
        org_patterns: Optional[Sequence[str]] = None,
        personal_patterns: Sequence[str] = (),
    ) -> TrackingBackend:
        """Classify a remote URL.

        Org patterns are checked first because organization repositories are
        usually hosted on github.com too; personal patterns come before the
        generic GitHub rule for the same reason.

        Args:
            remote_url: Remote URL, or None when no remote is configured
            org_patterns: Overrides the classifier's organization patterns
            personal_patterns: Personal account identifiers implying GitHub Issues

        Returns:
            TrackingBackend for the remote
        """
        if not remote_url:
            return TrackingBackend.NONE

        if org_patterns is None:
            org_patterns = self.org_patterns

        if _matches_any(remote_url, org_patterns):
            return TrackingBackend.JIRA
        if _matches_any(remote_url, personal_patterns):
            return TrackingBackend.GITHUB
        if _matches_any(remote_url, GITHUB_MARKERS):
            return TrackingBackend.GITHUB
        if _matches_any(remote_url, CORPORATE_MARKERS):
            return TrackingBackend.JIRA
        return TrackingBackend.NONE

    def detect(
        self,
        remote_url: Optional[str],
        personal_patterns: Sequence[str] = (),
    ) -> BackendDetection:
        """Classify a remote URL and keep it alongside the result."""
        backend = self.classify(remote_url, personal_patterns=personal_patterns)
        logger.debug("Classified remote %r as %s", remote_url, backend.value)
        return BackendDetection(backend=backend, remote_url=remote_url)
