"""Content store interface and the local-directory implementation."""

from .base import ContentStore
from .local import LocalFolderStore

__all__ = ["ContentStore", "LocalFolderStore"]
