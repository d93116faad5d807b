"""Persistence for draft, league and player registrations."""

from sleeper_draftbot.storage.dynamo import DataStoreError, DraftStore, StaleRegistrationError

__all__ = ["DraftStore", "DataStoreError", "StaleRegistrationError"]
