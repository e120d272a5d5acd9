"""Node representation for retained entries in the copy plan tree."""

from typing import Any, Optional

from anytree import Node


class CopyPlanNode(Node):  # type: ignore
    """Node class representing a copied file or created directory.

    Extends anytree.Node with the size of copied files. Only retained entries get a
    node, so the tree mirrors the destination layout.

    Attributes:
        name (str): The base name of the file or directory.
        parent (Optional[CopyPlanNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory, False for files.
        file_size (Optional[int]): Bytes copied for a file, None for directories.

    Example:
        >>> root = CopyPlanNode("backup", is_dir=True)
        >>> child = CopyPlanNode("notes.txt", parent=root, file_size=512)
        >>> child.parent.name
        'backup'
        >>> child.file_size
        512
    """

    def __init__(
        self,
        name: str,
        parent: Optional["CopyPlanNode"] = None,
        is_dir: bool = False,
        file_size: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.file_size = file_size

    def __repr__(self) -> str:
        if self.is_dir:
            return f"CopyPlanNode(name='{self.name}', is_dir=True)"
        return f"CopyPlanNode(name='{self.name}', file_size={self.file_size})"
