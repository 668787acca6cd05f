from .color_support import color_support

__all__ = ["color_support"]
