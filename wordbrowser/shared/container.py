# wordbrowser/shared/container.py
from dependency_injector import containers, providers

from wordbrowser.shared.config import settings, StorageBackend

# --- Adapters ---
from wordbrowser.adapters.dataset.loader import DatasetLoader
from wordbrowser.adapters.icons import IconResolver
from wordbrowser.adapters.storage import InMemoryStorage, JsonFileStorage

# --- Services & Use Cases ---
from wordbrowser.services.word_store import WordStore
from wordbrowser.core.use_cases.export_words import ExportWords
from wordbrowser.core.use_cases.load_dataset import LoadDataset


class Container(containers.DeclarativeContainer):
    """
    Dependency Injection Container.
    The composition root: owns the single WordStore and hands it to the HTTP
    routers, the CLI and the use cases.
    """

    wiring_config = containers.WiringConfiguration(
        modules=[
            "wordbrowser.adapters.api.routers.words",
            "wordbrowser.adapters.api.routers.favorites",
            "wordbrowser.adapters.api.routers.health",
        ]
    )

    # 1. Infrastructure

    if settings.STORAGE_BACKEND == StorageBackend.MEMORY:
        storage = providers.Singleton(InMemoryStorage)
    else:
        storage = providers.Singleton(
            JsonFileStorage,
            path=settings.STORAGE_PATH,
            quota_bytes=settings.STORAGE_QUOTA_BYTES,
        )

    dataset_loader = providers.Factory(
        DatasetLoader,
        base=settings.DATA_BASE,
        candidates=settings.DATASET_CANDIDATES,
        timeout=settings.DATASET_TIMEOUT,
    )

    icon_resolver = providers.Singleton(IconResolver, icon_dir=settings.ICON_DIR)

    # 2. Domain state

    word_store = providers.Singleton(
        WordStore,
        storage=storage,
        favorites_key=settings.FAVORITES_KEY,
        overrides_key=settings.OVERRIDES_KEY,
    )

    # 3. Use Cases

    load_dataset = providers.Factory(LoadDataset, source=dataset_loader, store=word_store)

    export_words = providers.Factory(ExportWords, store=word_store)
