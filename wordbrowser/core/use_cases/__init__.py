from .export_words import ExportWords
from .load_dataset import LoadDataset, LoadResult

__all__ = ["ExportWords", "LoadDataset", "LoadResult"]
