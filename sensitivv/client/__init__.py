# -*- coding: utf-8 -*-
"""Device-side client: secure session storage and the API gateway."""

from .gateway import ApiClient
from .session import SessionStore, StoredIdentity, default_session_store
from .storage import FileSecureStorage, MemoryStorage, SecureStorage

__all__ = [
    'ApiClient',
    'FileSecureStorage',
    'MemoryStorage',
    'SecureStorage',
    'SessionStore',
    'StoredIdentity',
    'default_session_store',
]
