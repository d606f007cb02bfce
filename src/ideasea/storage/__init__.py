"""Dataset persistence (JSON files)."""

from ideasea.storage.dataset import (
    Dataset,
    DatasetError,
    load_dataset,
    load_embeddings,
    load_projection,
    load_raw_ideas,
    save_layout,
)

__all__ = [
    "Dataset",
    "DatasetError",
    "load_dataset",
    "save_layout",
    "load_raw_ideas",
    "load_embeddings",
    "load_projection",
]
