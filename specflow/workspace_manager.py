"""
Workspace Manager

Feature folder management for a multi-project workspace. Lists projects,
reads existing feature specs, and creates the spec folder, spec file and git
branch for a new feature.
"""

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.markup import escape

from .backend_classifier import BackendClassifier
from .config import get_config
from .feature_namer import EmptyDescriptionError, FeatureNamer
from .git_integration import GitManager
from .models import BackendDetection, FeatureCreation

console = Console(stderr=True, soft_wrap=True)
logger = logging.getLogger(__name__)


class WorkspaceError(RuntimeError):
    """Project selection failed; carries the projects that do exist."""

    def __init__(self, message: str, available_projects: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.available_projects = list(available_projects)


class BranchCreationError(RuntimeError):
    """Git refused to create the feature branch; nothing was written."""

    def __init__(self, branch_name: str) -> None:
        self.branch_name = branch_name
        super().__init__(
            f"Could not create branch '{branch_name}'; "
            "no feature folder or spec file was created"
        )


class FeatureWorkspace:
    """Manages feature specs across the projects of a workspace."""

    def __init__(
        self,
        workspace_root: Optional[str] = None,
        git: Optional[GitManager] = None,
        namer: Optional[FeatureNamer] = None,
        classifier: Optional[BackendClassifier] = None,
    ) -> None:
        """Initialize feature workspace.

        Args:
            workspace_root: Directory holding one subdirectory per project (default: from config)
            git: Git wrapper used for remotes and branch creation
            namer: Feature namer used to resolve branch names
            classifier: Classifier used for tracking backend detection
        """
        config = get_config()
        self.workspace_root = Path(workspace_root or config.WORKSPACE_ROOT)
        self.specs_dir_name = config.SPECS_DIR_NAME
        self.template_path = Path(config.SPEC_TEMPLATE_PATH)
        self.spec_file_name = config.SPEC_FILE_NAME
        self.excluded_dirs = set(config.EXCLUDED_PROJECT_DIRS)
        self.git = git or GitManager()
        self.namer = namer or FeatureNamer(max_slug_words=config.MAX_SLUG_WORDS)
        self.classifier = classifier or BackendClassifier(org_patterns=config.ORG_PATTERNS)

    def list_projects(self) -> List[str]:
        """List project directories in the workspace.

        Returns:
            Sorted project names, excluding tooling directories
        """
        if not self.workspace_root.is_dir():
            return []

        return sorted(
            path.name
            for path in self.workspace_root.iterdir()
            if path.is_dir() and path.name not in self.excluded_dirs
        )

    def project_root(self, project: Optional[str]) -> Path:
        """Resolve a project name to its directory.

        Raises:
            WorkspaceError: If no project is given or it does not exist
        """
        if not project:
            raise WorkspaceError("--project parameter is required", self.list_projects())

        root = self.workspace_root / project
        if project in self.excluded_dirs or not root.is_dir():
            raise WorkspaceError(f"Project '{project}' not found in workspace", self.list_projects())
        return root

    def specs_dir(self, project: str) -> Path:
        return self.project_root(project) / self.specs_dir_name

    def existing_features(self, project: str) -> List[str]:
        """Names of feature directories already present under the project's specs dir."""
        specs_dir = self.specs_dir(project)
        if not specs_dir.is_dir():
            return []
        return sorted(path.name for path in specs_dir.iterdir() if path.is_dir())

    def create_feature(
        self,
        project: Optional[str],
        description: str,
        custom_name: Optional[str] = None,
    ) -> FeatureCreation:
        """Create the spec folder, spec file and branch for a new feature.

        Args:
            project: Project directory name within the workspace
            description: Free-text feature description (required)
            custom_name: Optional explicit branch name

        Returns:
            FeatureCreation describing what was created

        Raises:
            WorkspaceError: If the project is missing or unknown
            FeatureNameError: If the name cannot be derived or validated
            BranchCreationError: If git fails to create the branch
        """
        if not description or not description.strip():
            raise EmptyDescriptionError()

        project_root = self.project_root(project)
        specs_dir = project_root / self.specs_dir_name
        specs_dir.mkdir(parents=True, exist_ok=True)

        result = self.namer.resolve(description, custom_name, self.existing_features(project))
        feature = result.feature
        if result.advisory:
            console.print(f"[yellow]Warning: {result.advisory.message}[/yellow]")

        branch_created = False
        if self.git.get_repo_root(project_root) is not None:
            branch_created = self.git.create_branch(project_root, feature.full_name)
            if not branch_created:
                raise BranchCreationError(feature.full_name)
        else:
            console.print(
                f"[yellow]Warning: Git repository not detected; "
                f"skipped branch creation for {feature.full_name}[/yellow]"
            )

        feature_dir = specs_dir / feature.full_name
        feature_dir.mkdir(parents=True, exist_ok=True)
        spec_file = feature_dir / self.spec_file_name
        if spec_file.exists():
            console.print(f"[yellow]Warning: Keeping existing {escape(str(spec_file))}[/yellow]")
        elif self.template_path.is_file():
            shutil.copyfile(self.template_path, spec_file)
        else:
            spec_file.touch()

        logger.info("Created feature %s in %s", feature.full_name, project)

        return FeatureCreation(
            project=project,
            branch_name=feature.full_name,
            spec_file=str(spec_file),
            feature_num=feature.sequence_key,
            branch_created=branch_created,
            advisory=result.advisory,
        )

    def detect_backend(
        self,
        path: Path,
        personal_patterns: Sequence[str] = (),
    ) -> BackendDetection:
        """Classify the tracking backend of the repository at path.

        Args:
            path: Directory inside the repository
            personal_patterns: Personal account identifiers implying GitHub Issues
        """
        remote_url = self.git.get_remote_url(path)
        return self.classifier.detect(remote_url, personal_patterns)
