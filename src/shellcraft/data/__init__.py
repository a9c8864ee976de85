"""Packaged ShellCraft data files (quest text, default settings)."""
