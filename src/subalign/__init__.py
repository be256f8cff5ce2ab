"""
SubAlign - Caption correction against a ground-truth script.

Realigns time-coded caption text with the correct script using a word-level
diff, and normalizes Hinglish slang, accent spellings and number formats.
"""

__version__ = "0.1.0";
__author__ = "SubAlign Project";
__license__ = "MIT";
