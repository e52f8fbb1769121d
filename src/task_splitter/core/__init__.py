"""
Core wiring shared by the subsystems.

Components:
- ports.py: Protocols the orchestration layer depends on
- events.py: tiny subscribe/notify helper for observed state
- state.py: AppState composition record
"""
