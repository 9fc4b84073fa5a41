"""
Tests for BackendClassifier

Tests remote URL classification priority and personal pattern resolution.
"""

import subprocess

import pytest
from unittest.mock import Mock

from specflow.backend_classifier import (
    DEFAULT_ORG_PATTERNS,
    BackendClassifier,
    resolve_personal_patterns,
)
from specflow.models import BackendDetection, TrackingBackend


class TestClassify:
    """Test cases for BackendClassifier.classify."""

    def test_default_org_patterns(self, classifier: BackendClassifier):
        assert classifier.org_patterns == ("wiliot", "Wiliot", "wiliot-com")
        assert DEFAULT_ORG_PATTERNS == ("wiliot", "Wiliot", "wiliot-com")

    @pytest.mark.parametrize("remote_url", [None, ""])
    def test_no_remote(self, classifier: BackendClassifier, remote_url):
        assert classifier.classify(remote_url, DEFAULT_ORG_PATTERNS, ["someuser"]) == TrackingBackend.NONE

    def test_org_pattern_wins_over_github(self, classifier: BackendClassifier):
        result = classifier.classify("git@github.com:wiliot/foo.git", DEFAULT_ORG_PATTERNS, [])
        assert result == TrackingBackend.JIRA

    def test_org_pattern_wins_over_personal_pattern(self, classifier: BackendClassifier):
        result = classifier.classify(
            "https://github.com/Wiliot/someuser-tools.git", DEFAULT_ORG_PATTERNS, ["someuser"]
        )
        assert result == TrackingBackend.JIRA

    def test_personal_pattern(self, classifier: BackendClassifier):
        result = classifier.classify("git@github.com:someuser/foo.git", DEFAULT_ORG_PATTERNS, ["someuser"])
        assert result == TrackingBackend.GITHUB

    def test_personal_pattern_on_non_github_host(self, classifier: BackendClassifier):
        result = classifier.classify("git@gitlab.com:someuser/foo.git", DEFAULT_ORG_PATTERNS, ["someuser"])
        assert result == TrackingBackend.GITHUB

    def test_generic_github_fallback(self, classifier: BackendClassifier):
        result = classifier.classify("git@github.com:someuser/foo.git", DEFAULT_ORG_PATTERNS, [])
        assert result == TrackingBackend.GITHUB

    def test_github_ssh_host_alias(self, classifier: BackendClassifier):
        result = classifier.classify("git@github-personal:someuser/foo.git", DEFAULT_ORG_PATTERNS, [])
        assert result == TrackingBackend.GITHUB

    @pytest.mark.parametrize("remote_url", [
        "git@gitlab.com:team/foo.git",
        "https://gitlab.example.com/team/foo.git",
        "https://bitbucket.org/team/foo.git",
    ])
    def test_corporate_hosts_use_jira(self, classifier: BackendClassifier, remote_url: str):
        assert classifier.classify(remote_url, DEFAULT_ORG_PATTERNS, []) == TrackingBackend.JIRA

    def test_unknown_host(self, classifier: BackendClassifier):
        result = classifier.classify("ssh://git.example.com/team/foo.git", DEFAULT_ORG_PATTERNS, [])
        assert result == TrackingBackend.NONE

    def test_matching_is_case_sensitive(self, classifier: BackendClassifier):
        result = classifier.classify("git@github.com:WILIOT/foo.git", DEFAULT_ORG_PATTERNS, [])
        assert result == TrackingBackend.GITHUB

    def test_empty_patterns_are_ignored(self, classifier: BackendClassifier):
        result = classifier.classify("ssh://git.example.com/foo.git", [""], [""])
        assert result == TrackingBackend.NONE

    def test_org_patterns_default_to_instance_patterns(self):
        classifier = BackendClassifier(org_patterns=["acme"])

        assert classifier.classify("git@github.com:acme/foo.git") == TrackingBackend.JIRA
        assert classifier.classify("git@github.com:wiliot/foo.git") == TrackingBackend.GITHUB

    def test_explicit_org_patterns_override_instance(self, classifier: BackendClassifier):
        result = classifier.classify("git@github.com:wiliot/foo.git", org_patterns=[])
        assert result == TrackingBackend.GITHUB

    def test_classification_is_repeatable(self, classifier: BackendClassifier):
        args = ("git@github.com:someuser/foo.git", DEFAULT_ORG_PATTERNS, ["someuser"])
        assert classifier.classify(*args) == classifier.classify(*args)

    def test_backend_values(self):
        assert [b.value for b in TrackingBackend] == ["jira", "github", "none"]


class TestDetect:
    """Test cases for BackendClassifier.detect."""

    def test_detect_keeps_remote(self, classifier: BackendClassifier):
        detection = classifier.detect("git@github.com:wiliot/foo.git")

        assert detection == BackendDetection(TrackingBackend.JIRA, "git@github.com:wiliot/foo.git")
        assert detection.to_dict() == {
            "backend": "jira",
            "remote_url": "git@github.com:wiliot/foo.git",
            "detection_method": "pattern_matching",
        }

    def test_detect_without_remote(self, classifier: BackendClassifier):
        detection = classifier.detect(None)

        assert detection.backend == TrackingBackend.NONE
        assert detection.to_dict()["remote_url"] == ""


class TestResolvePersonalPatterns:
    """Test cases for resolve_personal_patterns."""

    def test_configured_patterns_win(self):
        provider = Mock(return_value="octocat")

        assert resolve_personal_patterns(["someuser", "some-user"], provider) == ("someuser", "some-user")
        provider.assert_not_called()

    def test_provider_used_when_nothing_configured(self):
        provider = Mock(return_value="octocat")

        assert resolve_personal_patterns([], provider) == ("octocat",)
        provider.assert_called_once_with()

    def test_provider_returning_nothing(self):
        assert resolve_personal_patterns(None, Mock(return_value=None)) == ()

    def test_no_provider(self):
        assert resolve_personal_patterns(None) == ()

    @pytest.mark.parametrize("error", [
        FileNotFoundError("gh"),
        subprocess.CalledProcessError(1, ["gh", "api", "user"]),
    ])
    def test_provider_failure_degrades_to_empty(self, error: Exception):
        assert resolve_personal_patterns([], Mock(side_effect=error)) == ()

    def test_blank_configured_patterns_are_dropped(self):
        assert resolve_personal_patterns(["", "someuser"]) == ("someuser",)
