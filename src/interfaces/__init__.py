"""Public interface definitions for all external service providers.

Every external API or service used by the narration pipeline is accessed
exclusively through the abstract base classes defined in this package.
Concrete adapters implement these interfaces and are injected at runtime
(see ``src/main.py``), so business logic never imports a vendor SDK and
unit tests can substitute mocks.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────────
    IIdentityProvider          →  SupabaseIdentityProvider
    ITextExtractor             →  PyMuPDFTextExtractor
    ILLMProvider               →  OpenAILLMProvider
    ISpeechProvider            →  ElevenLabsSpeechProvider
    IObjectStore               →  SupabaseStorageProvider
    IUserSettingsProvider      →  SQLiteUserSettingsProvider
    IFileRecordProvider        →  SQLiteFileRecordProvider
    ICacheProvider             →  MemoryCacheProvider, RedisCacheProvider
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.file_record_provider import IFileRecordProvider
from src.interfaces.identity_provider import IIdentityProvider
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.object_store import IObjectStore
from src.interfaces.speech_provider import ISpeechProvider
from src.interfaces.text_extractor import ITextExtractor
from src.interfaces.user_settings_provider import IUserSettingsProvider

__all__ = [
    "ICacheProvider",
    "IFileRecordProvider",
    "IIdentityProvider",
    "ILLMProvider",
    "IObjectStore",
    "ISpeechProvider",
    "ITextExtractor",
    "IUserSettingsProvider",
]
