"""
ShellCraft player progression package.

- soul: the soul.dat record, its binary codec and durable storage
- quests: quest text catalog, progress checks and the quest journal
- cli: command-line entry points composing the two

The soul package has no dependency on quests; the CLI layer glues them.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
