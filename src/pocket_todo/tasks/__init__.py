"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) and storage errors
- task_codec.py: JSON wire format of the whole task list
- task_ids.py: id allocators (UUID, counter)
- task_sync.py: write-through persistence to a key-value store
- task_store.py: in-memory task list with add/toggle/delete/hydrate
"""
