"""
Pytest configuration and fixtures for specflow tests.

Provides common test fixtures, setup, and utilities for testing
specflow components.
"""

import pytest
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Generator, List
from unittest.mock import Mock

from specflow import config as config_module
from specflow.config import update_config
from specflow.backend_classifier import BackendClassifier
from specflow.feature_namer import FeatureNamer
from specflow.workspace_manager import FeatureWorkspace


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Give every test a fresh configuration singleton."""
    monkeypatch.setattr(config_module, "_config", None)
    yield
    monkeypatch.setattr(config_module, "_config", None)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for testing."""
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def workspace_root(temp_dir: Path) -> Path:
    """Create a mock multi-project workspace.

    Layout::

        workspace/
          .claude/
          .devcontainer/
          wiliot-mcp-python/specs/{001-initial-setup,002-add-auth,README.md}
          wiliot-agentic-kit/
    """
    root = temp_dir / "workspace"
    (root / ".claude").mkdir(parents=True)
    (root / ".devcontainer").mkdir()

    create_mock_project(root, "wiliot-mcp-python", ["001-initial-setup", "002-add-auth"])
    (root / "wiliot-mcp-python" / "specs" / "README.md").write_text("# Specs")

    (root / "wiliot-agentic-kit").mkdir()

    update_config(
        WORKSPACE_ROOT=str(root),
        SPEC_TEMPLATE_PATH=str(root / ".claude" / ".specify" / "templates" / "spec-template.md"),
    )
    return root


@pytest.fixture
def spec_template(workspace_root: Path) -> Path:
    """Create the spec template inside the workspace's .claude directory."""
    template = workspace_root / ".claude" / ".specify" / "templates" / "spec-template.md"
    template.parent.mkdir(parents=True)
    template.write_text("# Feature Specification: [FEATURE NAME]\n")
    return template


@pytest.fixture
def mock_git() -> Mock:
    """Provide a GitManager double for a project without git."""
    git = Mock()
    git.get_repo_root.return_value = None
    git.get_remote_url.return_value = None
    git.create_branch.return_value = True
    return git


@pytest.fixture
def feature_workspace(workspace_root: Path, mock_git: Mock) -> FeatureWorkspace:
    """Provide FeatureWorkspace instance for testing."""
    return FeatureWorkspace(git=mock_git)


@pytest.fixture
def namer() -> FeatureNamer:
    """Provide FeatureNamer instance for testing."""
    return FeatureNamer()


@pytest.fixture
def classifier() -> BackendClassifier:
    """Provide BackendClassifier instance with the default org patterns."""
    return BackendClassifier()


@pytest.fixture
def git_repo(temp_dir: Path) -> Path:
    """Create a real git repository with an origin remote."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo_dir = temp_dir / "git-repo"
    repo_dir.mkdir()
    subprocess.run(["git", "init", "-q", str(repo_dir)], check=True)
    subprocess.run(
        ["git", "-C", str(repo_dir), "remote", "add", "origin", "git@github.com:wiliot/test-repo.git"],
        check=True,
    )
    return repo_dir


# Test utilities

def create_mock_project(workspace: Path, name: str, features: List[str]) -> Path:
    """Create a project directory with feature spec folders.

    Args:
        workspace: Workspace root
        name: Project directory name
        features: Feature folder names to create under specs/

    Returns:
        Path to created project
    """
    project = workspace / name
    specs = project / "specs"
    specs.mkdir(parents=True)
    for feature in features:
        (specs / feature).mkdir()
        (specs / feature / "spec.md").write_text(f"# {feature}")
    return project


# Pytest configuration

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "requires_git: mark test as requiring git"
    )
