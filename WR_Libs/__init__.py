"""
WR_Libs - Watermark Remover Library Modules

This package contains core functionality for the watermark remover,
organized into specialized sub-packages:

- InpaintingLib: Fast-marching region inpainting engine and image export
- NodesLib: Node-graph wrappers and the node executor registry
"""

__version__ = "0.1.0"
