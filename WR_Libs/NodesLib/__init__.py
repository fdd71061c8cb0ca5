"""
Watermark Remover Nodes Library.

Node implementations for the pipeline, plus the executor registry.

Modules:
    inpaint_node: Region inpainting node
    export_node: Image export node
    node_executors: Node type registry
"""

from WR_Libs.NodesLib.inpaint_node import (
    InpaintNodeConfig,
    execute_inpaint_node,
    create_inpaint_node,
)
from WR_Libs.NodesLib.export_node import (
    ExportNodeConfig,
    execute_export_node,
    create_export_node,
)
from WR_Libs.NodesLib.node_executors import (
    NodeExecutorRegistry,
    get_default_registry,
    register_default_executors,
)

__all__ = [
    "InpaintNodeConfig",
    "execute_inpaint_node",
    "create_inpaint_node",
    "ExportNodeConfig",
    "execute_export_node",
    "create_export_node",
    "NodeExecutorRegistry",
    "get_default_registry",
    "register_default_executors",
]
