"""
Task subsystem.

Components:
- task_models.py: data structures (Task, FilterMode, TaskStats, TaskView)
- task_store.py: in-memory store + mutate -> render -> persist pipeline
- task_filter.py: pure visible-subset / counter derivations
- persistence.py: versioned save/load over a key-value storage
- task_import.py: import validation, JSON export/import files
- errors.py: recoverable task errors
"""
