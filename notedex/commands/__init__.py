"""
Command handlers for the notedex CLI tool.

This module provides command handlers for the notedex CLI tool.
"""

from notedex.commands.ingest import ingest_notes_command
from notedex.commands.render import render_note_command
from notedex.commands.search import search_notes_command

__all__ = [
    "ingest_notes_command",
    "render_note_command",
    "search_notes_command",
]
