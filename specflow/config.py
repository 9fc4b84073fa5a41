"""
Configuration and Constants for specflow

Centralizes the workspace layout, tracking-backend patterns and external tool
commands used throughout the codebase. Values can be overridden via config YAML
files or environment variables.
"""

from typing import List, Optional
import os


def _split_patterns(raw: Optional[str]) -> List[str]:
    """Split a comma separated environment value into non-empty patterns."""
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


class Constants:
    """Centralized constants for specflow.

    These can be overridden at runtime or via configuration files.
    """

    # Workspace layout
    WORKSPACE_ROOT: str = os.getenv("SPECFLOW_WORKSPACE_ROOT", "/workspace")
    SPECS_DIR_NAME: str = os.getenv("SPECFLOW_SPECS_DIR", "specs")
    SPEC_TEMPLATE_PATH: str = os.getenv(
        "SPECFLOW_SPEC_TEMPLATE",
        "/workspace/.claude/.specify/templates/spec-template.md",
    )
    SPEC_FILE_NAME: str = "spec.md"
    EXCLUDED_PROJECT_DIRS: set = {
        ".claude",
        ".devcontainer",
    }

    # Feature naming
    MAX_SLUG_WORDS: int = 3

    # Tracking backend detection
    ORG_PATTERNS: list = [
        "wiliot",
        "Wiliot",
        "wiliot-com",
    ]
    PERSONAL_PATTERNS: list = _split_patterns(os.getenv("GITHUB_PERSONAL_PATTERNS"))
    DEFAULT_REMOTE: str = "origin"

    # External tool commands
    GIT_COMMAND: str = os.getenv("SPECFLOW_GIT_CMD", "git")
    GITHUB_CLI_COMMAND: str = os.getenv("SPECFLOW_GH_CMD", "gh")

    # Timeouts (in seconds)
    SUBPROCESS_TIMEOUT: int = int(os.getenv("SPECFLOW_SUBPROCESS_TIMEOUT", "30"))


# Configuration singleton that can be updated at runtime
_config: Optional[Constants] = None


def get_config() -> Constants:
    """Get configuration singleton.

    Returns:
        Constants object with current configuration
    """
    global _config
    if _config is None:
        _config = Constants()
    return _config


def update_config(**kwargs) -> None:
    """Update configuration values at runtime.

    Args:
        **kwargs: Configuration key-value pairs to update

    Example:
        update_config(WORKSPACE_ROOT="/tmp/workspace", PERSONAL_PATTERNS=["octocat"])
    """
    config = get_config()
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
        else:
            raise ValueError(f"Unknown configuration key: {key}")


def apply_yaml_config(data: Optional[dict]) -> None:
    """Apply a parsed YAML configuration mapping to the config singleton.

    Recognized keys::

        workspace:
          root: /workspace
          specs_dir: specs
          spec_template: /workspace/.claude/.specify/templates/spec-template.md
        tracking:
          org_patterns: [wiliot, Wiliot, wiliot-com]
          personal_patterns: [octocat]

    Args:
        data: Mapping loaded with ``yaml.safe_load`` (None is ignored)
    """
    if not data:
        return

    workspace = data.get("workspace") or {}
    tracking = data.get("tracking") or {}

    overrides = {}
    if workspace.get("root"):
        overrides["WORKSPACE_ROOT"] = str(workspace["root"])
    if workspace.get("specs_dir"):
        overrides["SPECS_DIR_NAME"] = str(workspace["specs_dir"])
    if workspace.get("spec_template"):
        overrides["SPEC_TEMPLATE_PATH"] = str(workspace["spec_template"])
    if tracking.get("org_patterns") is not None:
        overrides["ORG_PATTERNS"] = [str(p) for p in tracking["org_patterns"]]
    if tracking.get("personal_patterns") is not None:
        overrides["PERSONAL_PATTERNS"] = [str(p) for p in tracking["personal_patterns"]]

    update_config(**overrides)
