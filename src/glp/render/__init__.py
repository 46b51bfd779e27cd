"""Terminal rendering of pipeline status trees."""

from .formatting import format_ago, format_duration, render_label
from .tree import TreeNode, pipeline_node, print_pipelines, render_tree

__all__ = [
    "TreeNode",
    "format_ago",
    "format_duration",
    "pipeline_node",
    "print_pipelines",
    "render_label",
    "render_tree",
]
