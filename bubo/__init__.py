"""
bubo
====

BuboAgent: an HTTP façade over a Gemini agent that can read the Firebase
Realtime Database, local spreadsheets, Google Drive and Google Sheets.

The process entry point is ``bubo.main`` (``build_app`` / ``main``).
"""

__version__ = "1.0.0"
