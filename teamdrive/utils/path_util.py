"""Materialized path helpers for folders and files.

A folder stores the ``(id, name)`` entries of its ancestors from the team
root down to its parent. The root folder stores only its own entry, which
is why a root parent contributes nothing but itself to a child's path.
A file stores plain names: the ancestors of its folder, the folder itself,
then the file's display name.
"""
from __future__ import annotations

from typing import List, Sequence

from teamdrive.consts import ROOT_FOLDER_NAME
from teamdrive.models.folder import FolderPathItem


def root_folder_path(folder_id: str) -> List[FolderPathItem]:
    """Path stored on a team's root folder: its own entry only."""
    return [FolderPathItem(id=folder_id, name=ROOT_FOLDER_NAME)]


def extend_folder_path(
    parent_path: Sequence[FolderPathItem],
    parent_id: str,
    parent_name: str,
    *,
    parent_is_root: bool = False,
) -> List[FolderPathItem]:
    """Path of a new folder created under the given parent."""
    ancestors = [] if parent_is_root else [FolderPathItem(id=item.id, name=item.name) for item in parent_path]
    ancestors.append(FolderPathItem(id=parent_id, name=parent_name))
    return ancestors


def extend_file_path(
    parent_path: Sequence[FolderPathItem],
    parent_name: str,
    file_name: str,
    *,
    parent_is_root: bool = False,
) -> List[str]:
    """Breadcrumb of a new file stored in the given folder.

    Example: a file "Q1.pdf" in "Reports" (a child of root) gets
    ``["root", "Reports", "Q1.pdf"]``.
    """
    names = [] if parent_is_root else [item.name for item in parent_path]
    names.extend([parent_name, file_name])
    return names


def rename_leaf(path: Sequence[str], new_name: str) -> List[str]:
    """Copy of a file path with only its last element replaced."""
    if not path:
        return [new_name]
    renamed = list(path)
    renamed[-1] = new_name
    return renamed


__all__ = [
    "root_folder_path",
    "extend_folder_path",
    "extend_file_path",
    "rename_leaf",
]
