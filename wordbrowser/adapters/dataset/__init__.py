from .loader import DatasetLoader

__all__ = ["DatasetLoader"]
