"""
Services Layer

Pure business logic services that:
- Accept domain inputs (IDs, sessions, etc.)
- Return domain outputs (models, dataclasses)
- Raise league_api.errors exceptions, never HTTP errors
"""
