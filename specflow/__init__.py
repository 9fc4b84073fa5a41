"""
specflow - Feature Naming and Tracking Backend Detection

A small development tool behind the spec -> plan -> tasks -> implement workflow:
it numbers and names feature spec folders and branches, and works out whether a
repository tracks its work in Jira or GitHub Issues.
"""

__version__ = "0.1.0"
__author__ = "specflow Development Team"

from .feature_namer import (
    FeatureNamer,
    FeatureNameError,
    EmptyDescriptionError,
    SlashNotAllowedError,
    InvalidNameFormatError,
    SequenceExhaustedError,
)
from .backend_classifier import BackendClassifier, resolve_personal_patterns
from .models import FeatureName, NamingResult, SequenceMismatch, TrackingBackend
from .workspace_manager import BranchCreationError, FeatureWorkspace, WorkspaceError

__all__ = [
    "FeatureNamer",
    "FeatureNameError",
    "EmptyDescriptionError",
    "SlashNotAllowedError",
    "InvalidNameFormatError",
    "SequenceExhaustedError",
    "BackendClassifier",
    "resolve_personal_patterns",
    "FeatureName",
    "NamingResult",
    "SequenceMismatch",
    "TrackingBackend",
    "FeatureWorkspace",
    "WorkspaceError",
    "BranchCreationError",
]
