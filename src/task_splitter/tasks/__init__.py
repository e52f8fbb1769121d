"""
Task subsystem.

Components:
- task_models.py: data structures (TaskNode)
- task_store.py: JSON-backed task forest + recursive edits by id
- splitter.py: split workflow (prompt -> provider -> subtasks)
"""
