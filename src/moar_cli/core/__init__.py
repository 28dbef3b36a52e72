"""Core git access used by the package analyzer."""

from .git import CommandOutput, GitCommandError, GitRepository, StatusResult

__all__ = ["CommandOutput", "GitCommandError", "GitRepository", "StatusResult"]
