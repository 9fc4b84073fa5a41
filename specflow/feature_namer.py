"""
Feature Namer

Computes the next feature sequence number for a project and turns either a
free-text description or a user-supplied custom name into a validated
FeatureName. Pure functions only: callers list the specs directory and act on
the result (folder creation, branch checkout).
"""

import logging
import re
from typing import Iterable, Optional, Tuple

from .models import FeatureName, NamingResult, SequenceMismatch

logger = logging.getLogger(__name__)

LEADING_DIGITS_RE = re.compile(r"^[0-9]+")
NON_SLUG_CHARS_RE = re.compile(r"[^a-z0-9]+")
TICKET_NAME_RE = re.compile(r"(?P<key>[A-Z]+-[0-9]+)-(?P<slug>[a-z0-9-]+)")
SEQUENTIAL_NAME_RE = re.compile(r"(?P<key>[0-9]{3})-(?P<slug>[a-z0-9-]+)")
MAX_SEQUENTIAL_NUMBER = 999

ACCEPTED_FORMATS: Tuple[str, ...] = (
    "Ticket-based: CLDS-1234-feature-name (e.g., CLDS-1234-auth-system)",
    "Sequential: 005-feature-name (e.g., 005-auth-system)",
)


class FeatureNameError(ValueError):
    """Base class for feature naming failures."""


class EmptyDescriptionError(FeatureNameError):
    """Auto-naming was requested but the description has no usable words."""

    def __init__(self) -> None:
        super().__init__("Feature description is empty; provide a description to name the feature")


class SlashNotAllowedError(FeatureNameError):
    """Custom name contains a slash."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Branch names must NOT contain slashes (/): {name!r}. "
            "Use format: TICKET-type-description (e.g., CLDS-1234-feature-name)"
        )


class SequenceExhaustedError(FeatureNameError):
    """Next sequential number no longer fits the three-digit key."""

    def __init__(self, next_number: int) -> None:
        self.next_number = next_number
        super().__init__(
            f"Next feature number {next_number} exceeds {MAX_SEQUENTIAL_NUMBER}. "
            "Use a ticket-based custom name instead (e.g., CLDS-1234-feature-name)"
        )


class InvalidNameFormatError(FeatureNameError):
    """Custom name matches neither the ticket-based nor the sequential format."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.accepted_formats = ACCEPTED_FORMATS
        formats = "; ".join(ACCEPTED_FORMATS)
        super().__init__(
            f"Custom name {name!r} must match one of these formats: {formats}. "
            "Feature name must contain only lowercase letters, numbers, and hyphens"
        )


class FeatureNamer:
    """Derives and validates feature branch/folder names."""

    def __init__(self, max_slug_words: int = 3) -> None:
        """Initialize feature namer.

        Args:
            max_slug_words: Number of description words kept in auto-generated slugs
        """
        self.max_slug_words = max_slug_words

    def next_sequential_number(self, existing: Iterable[str]) -> int:
        """Return one more than the highest numeric prefix among existing names.

        Names without leading digits count as 0, so an empty or fully
        non-numeric listing yields 1.

        Args:
            existing: Directory names already present under the specs directory

        Returns:
            Next free sequential feature number
        """
        highest = 0
        for name in existing:
            match = LEADING_DIGITS_RE.match(name)
            number = int(match.group(0)) if match else 0
            if number > highest:
                highest = number
        return highest + 1

    def derive_auto_name(self, description: str, next_number: int) -> FeatureName:
        """Build a sequential FeatureName from the first words of a description.

        Args:
            description: Free-text feature description
            next_number: Sequence number to zero-pad into the key

        Returns:
            FeatureName such as ``005-add-user-authentication``

        Raises:
            EmptyDescriptionError: If no words can be extracted
            SequenceExhaustedError: If next_number needs more than three digits
        """
        normalized = NON_SLUG_CHARS_RE.sub("-", (description or "").lower())
        words = [word for word in normalized.split("-") if word]
        if not words:
            raise EmptyDescriptionError()
        if next_number > MAX_SEQUENTIAL_NUMBER:
            raise SequenceExhaustedError(next_number)

        slug = "-".join(words[:self.max_slug_words])
        return FeatureName(sequence_key=f"{next_number:03d}", slug=slug)

    def validate_custom_name(self, name: str, next_number: int) -> NamingResult:
        """Validate a user-supplied branch name.

        Ticket-based names are accepted regardless of ``next_number``. A
        sequential name whose number differs from ``next_number`` is kept as
        given and reported through ``NamingResult.advisory``.

        Raises:
            SlashNotAllowedError: If the name contains ``/``
            InvalidNameFormatError: If the name matches neither format
        """
        if "/" in name:
            raise SlashNotAllowedError(name)

        match = TICKET_NAME_RE.fullmatch(name)
        if match:
            return NamingResult(FeatureName(match.group("key"), match.group("slug")))

        match = SEQUENTIAL_NAME_RE.fullmatch(name)
        if match:
            feature = FeatureName(match.group("key"), match.group("slug"))
            requested = int(match.group("key"))
            advisory = None
            if requested != next_number:
                advisory = SequenceMismatch(requested=requested, expected=next_number)
                logger.info(advisory.message)
            return NamingResult(feature, advisory)

        raise InvalidNameFormatError(name)

    def resolve(
        self,
        description: str,
        custom_name: Optional[str],
        existing: Iterable[str],
    ) -> NamingResult:
        """Resolve the final feature name for a project.

        Args:
            description: Free-text feature description
            custom_name: Optional explicit branch name (takes precedence when non-empty)
            existing: Directory names already present under the specs directory

        Returns:
            NamingResult with the FeatureName and any advisory
        """
        next_number = self.next_sequential_number(existing)
        if custom_name:
            return self.validate_custom_name(custom_name, next_number)

        feature = self.derive_auto_name(description, next_number)
        logger.debug("Auto-generated feature name %s", feature.full_name)
        return NamingResult(feature)
