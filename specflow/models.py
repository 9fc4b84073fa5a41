"""
Data Models for specflow

Value types shared by the feature naming core, the tracking backend classifier
and the workspace layer that creates feature folders and branches.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


TICKET_KEY_RE = re.compile(r"[A-Z]+-[0-9]+")
SEQUENTIAL_KEY_RE = re.compile(r"[0-9]{3}")
SLUG_RE = re.compile(r"[a-z0-9-]+")


@dataclass(frozen=True)
class FeatureName:
    """Validated feature identifier used as both branch and specs folder name."""
    sequence_key: str  # '005' or 'CLDS-1234'
    slug: str

    def __post_init__(self) -> None:
        if not (TICKET_KEY_RE.fullmatch(self.sequence_key) or SEQUENTIAL_KEY_RE.fullmatch(self.sequence_key)):
            raise ValueError(f"Invalid sequence key: {self.sequence_key!r}")
        if not SLUG_RE.fullmatch(self.slug):
            raise ValueError(f"Invalid slug: {self.slug!r}")

    @property
    def full_name(self) -> str:
        return f"{self.sequence_key}-{self.slug}"

    @property
    def is_ticket_based(self) -> bool:
        return bool(TICKET_KEY_RE.fullmatch(self.sequence_key))

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class SequenceMismatch:
    """Advisory raised when a sequential custom name skips the expected number."""
    requested: int
    expected: int

    @property
    def message(self) -> str:
        return (
            f"Custom name uses number {self.requested} but next available is {self.expected}. "
            "Using custom number anyway. Make sure this is intentional."
        )


@dataclass(frozen=True)
class NamingResult:
    """Outcome of resolving a feature name, with an optional non-fatal advisory."""
    feature: FeatureName
    advisory: Optional[SequenceMismatch] = None


class TrackingBackend(str, Enum):
    """Issue-tracking system inferred from a repository's git remote."""
    JIRA = "jira"
    GITHUB = "github"
    NONE = "none"


@dataclass(frozen=True)
class BackendDetection:
    """Classification of a remote URL plus the inputs that produced it."""
    backend: TrackingBackend
    remote_url: Optional[str]
    detection_method: str = "pattern_matching"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backend": self.backend.value,
            "remote_url": self.remote_url or "",
            "detection_method": self.detection_method,
        }


@dataclass
class FeatureCreation:
    """Result of creating a feature folder, spec file and branch in a project."""
    project: str
    branch_name: str
    spec_file: str
    feature_num: str
    branch_created: bool = False
    advisory: Optional[SequenceMismatch] = None

    def to_dict(self) -> Dict[str, str]:
        """Serialize using the upper-case keys consumed by the command prompts."""
        return {
            "PROJECT": self.project,
            "BRANCH_NAME": self.branch_name,
            "SPEC_FILE": self.spec_file,
            "FEATURE_NUM": self.feature_num,
        }


@dataclass
class RepoContext:
    """Repository details reported by the GitHub CLI."""
    owner: str
    name: str
    default_branch: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
