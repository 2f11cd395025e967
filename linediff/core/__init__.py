"""
Core comparison logic.

Pure, UI-agnostic models and engines. Nothing in this package performs
I/O or keeps state between calls.
"""
