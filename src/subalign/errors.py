"""
Error taxonomy for SubAlign.

Top-level input problems are hard failures; structural noise inside a caption
track (malformed blocks) is dropped silently by the parser instead.
"""


class SubAlignError( Exception ):
    """Base class for all errors surfaced to SubAlign callers."""
    pass


class EmptyInputError( SubAlignError ):
    """Caption track or script text is missing or whitespace-only."""
    pass


class NoParseableBlocksError( SubAlignError ):
    """Caption text contains no block with an id, a time range and text."""

    def __init__( self, message: str = "No valid subtitles found. Please check if the source file is a valid SRT with timestamps." ):
        super().__init__( message );


class EmptyScriptAfterCleaningError( SubAlignError ):
    """Script text has no words left once non-dialogue content is removed."""

    def __init__( self, message: str = "Script contains no usable text after cleaning. It might only contain metadata, scene headers, or timestamps which are automatically removed." ):
        super().__init__( message );


class InvalidPatternError( SubAlignError ):
    """A caller-supplied search pattern is not a valid regular expression."""

    def __init__( self, pattern: str, reason: str = "" ):
        self.pattern = pattern;
        self.reason = reason;
        message = f"Invalid search pattern: {pattern!r}";
        if reason:
            message += f" ({reason})";
        super().__init__( message );
