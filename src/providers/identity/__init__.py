"""Bearer-token identity providers."""

from src.providers.identity.supabase_identity_provider import SupabaseIdentityProvider

__all__ = ["SupabaseIdentityProvider"]
