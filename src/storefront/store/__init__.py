"""Store factory.

build_store() picks the implementation named by ``Settings.store_adapter``:
- InMemoryStore for demo mode and testing (seeded with the demo catalogue)
- PostgrestStore for the hosted backend
"""

from storefront.settings import Settings, load_settings
from storefront.store.port import StoreError, StorePort


def build_store(settings: Settings | None = None) -> StorePort:
    settings = settings or load_settings()
    adapter = settings.store_adapter
    if adapter == "memory":
        from storefront.catalogue.demo import seed_demo_catalogue
        from storefront.store.memory import InMemoryStore

        store = InMemoryStore()
        seed_demo_catalogue(store)
        return store
    if adapter == "postgrest":
        from storefront.store.postgrest import PostgrestStore

        if not settings.store_url or not settings.store_key:
            raise ValueError("STORE_URL and STORE_KEY must be set for the postgrest store adapter")
        return PostgrestStore(url=settings.store_url, api_key=settings.store_key)
    raise ValueError(f"Unknown store adapter: {adapter}")


__all__ = ["StoreError", "StorePort", "build_store"]
