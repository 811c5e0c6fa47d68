"""
Persistence.

Components:
- json_store.py: AppData <-> JSON document codec, file-backed BlobStore, load/save helpers
"""
