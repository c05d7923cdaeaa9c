"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStats)
- task_codec.py: flat-text encode/decode of the task list
- task_store.py: observable in-memory list + queued persistence
- task_api.py: input validation and formatting helpers used by the UI
"""
