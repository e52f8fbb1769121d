"""
AI provider subsystem.

Components:
- models.py: ProviderType / ProviderConfig
- config_store.py: JSON-backed configuration store (+ legacy key migration)
- client.py: AIProvider, one request builder / response extractor per backend
"""
