from app.api.v1 import tools

__all__ = [
    "tools",
]
