"""
Claude Config Composer - merge configuration bundles for AI coding assistants

Combines the CLAUDE.md documents, agents, commands, hooks and settings of
several configuration bundles into one coherent configuration.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
