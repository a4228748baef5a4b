"""File record store providers."""

from src.providers.records.sqlite_file_record_provider import SQLiteFileRecordProvider

__all__ = ["SQLiteFileRecordProvider"]
