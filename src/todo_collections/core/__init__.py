"""
Core state/update engine.

Components:
- models.py: Task, Filter, Collection (task CRUD + filtered bulk removal)
- messages.py: tagged message variants routed through the nested update() calls
- navigation.py: derived handle -> collection position index
- state.py: AppData (persisted root) and App (top-level controller)
- ports.py: storage slot interface
"""
