"""
Multi-collection to-do manager.

Components:
- core/: data model (Task, Filter, Collection), messages, navigation index, App controller
- storage/: JSON persistence for the application state
- cli/: composition root, slash commands, process entry point
- connectors/: interactive console front-end
"""
