"""
Command-line front end.

Components:
- bootstrap.py: composition root (settings -> storage -> App), shutdown persistence
- commands.py: slash-command registry translating console input into messages
- main.py: process entry point
"""
