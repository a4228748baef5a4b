"""Audio object storage providers."""

from src.providers.storage.supabase_storage_provider import SupabaseStorageProvider

__all__ = ["SupabaseStorageProvider"]
