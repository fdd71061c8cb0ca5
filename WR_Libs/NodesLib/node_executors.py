"""
Node Executors Registry.

Maps node type names ("Inpaint", "Export") to executor functions, so a
caller holding a node dict can run it by its type.

Classes:
    NodeExecutorRegistry: Registry for node executors

Functions:
    get_default_registry: Get the global default registry (singleton)
    register_default_executors: Register the built-in Inpaint and Export nodes
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from WR_Libs.constants import NODE_TYPE_EXPORT, NODE_TYPE_INPAINT

logger = logging.getLogger(__name__)

# Executor signature: (node_dict, inputs) -> output
ExecutorFunction = Callable[[Dict[str, Any], List[Any]], Any]


class NodeExecutorRegistry:
    """
    Registry for node type executors.
    
    Example:
        >>> registry = NodeExecutorRegistry()
        >>> registry.register("Inpaint", execute_inpaint_node)
        >>> cleaned = registry.execute("Inpaint", node_dict, [image])
    """

    def __init__(self):
        self._executors: Dict[str, ExecutorFunction] = {}

    def register(self, node_type: str, executor: ExecutorFunction) -> None:
        """
        Register a node executor.
        
        Raises:
            ValueError: If node_type is empty or executor is not callable
            RuntimeError: If node_type is already registered
        """
        node_type = str(node_type).strip()

        if not node_type:
            raise ValueError("node_type cannot be empty")

        if not callable(executor):
            raise ValueError(f"executor must be callable, got {type(executor)}")

        if node_type in self._executors:
            raise RuntimeError(f"Node type '{node_type}' is already registered")

        self._executors[node_type] = executor
        logger.debug(f"Registered executor for node type: {node_type}")

    def execute(
        self,
        node_type: str,
        node_dict: Dict[str, Any],
        inputs: List[Any],
    ) -> Any:
        """
        Run the executor registered for `node_type`.
        
        Raises:
            KeyError: If node_type is not registered
        """
        node_type = str(node_type).strip()

        executor = self._executors.get(node_type)
        if executor is None:
            available = ", ".join(self.list_node_types())
            raise KeyError(
                f"No executor registered for node type '{node_type}'. "
                f"Available types: {available}"
            )

        return executor(node_dict, inputs)

    def list_node_types(self) -> List[str]:
        return sorted(self._executors)


_default_registry: Optional[NodeExecutorRegistry] = None


def get_default_registry() -> NodeExecutorRegistry:
    """Global registry with the built-in nodes, created on first call."""
    global _default_registry

    if _default_registry is None:
        _default_registry = NodeExecutorRegistry()
        register_default_executors(_default_registry)

    return _default_registry


def register_default_executors(registry: NodeExecutorRegistry) -> None:
    """Register the Inpaint and Export node executors with `registry`."""
    from WR_Libs.NodesLib.inpaint_node import execute_inpaint_node
    from WR_Libs.NodesLib.export_node import execute_export_node

    registry.register(NODE_TYPE_INPAINT, execute_inpaint_node)
    registry.register(NODE_TYPE_EXPORT, execute_export_node)

    logger.info("Registered default node executors")
