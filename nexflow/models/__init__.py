from .tool import ToolSelection

__all__ = [
    "ToolSelection",
]
