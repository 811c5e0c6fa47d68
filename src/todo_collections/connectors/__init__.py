"""
Front-ends that drive the App with messages.

Components:
- console_connector.py: interactive line-based console
"""
