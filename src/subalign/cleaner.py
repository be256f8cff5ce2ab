"""
Non-dialogue text removal for scripts and caption text.

Strips URLs, bracketed directions, scene headings, speaker labels, transcription
artifacts and stray numbering so that only spoken words reach the word diff.
"""
import re
from typing import List, Tuple

from .logging import get_logger


class TextCleaner:
    """
    Pattern-based cleaner for script and subtitle text.

    Rules run in a fixed order, each one relying on the noise removed by the
    rules before it:
    1. URLs (http://, https://, www.)
    2. Bracketed asides: [Shot 1], (laughs), {note}, <i>
    3. Scene and camera direction lines (INT., EXT., CUT TO:, ...)
    4. Speaker label prefixes (JOHN:, Narrator (V.O.):, > Host:, Alice - )
    5. "unknown" / "unknow" transcription artifacts
    6. Lines holding nothing but digits
    7. Whitespace collapse
    """

    def __init__( self ):
        self.logger = get_logger();

        # (pattern, replacement) in application order
        self.rules: List[Tuple[re.Pattern, str]] = [
            ( re.compile( r'https?://\S+' ), '' ),
            ( re.compile( r'www\.\S+' ), '' ),
            ( re.compile( r'\[.*?\]|\(.*?\)|\{.*?\}|<.*?>' ), '' ),
            ( re.compile( r'^[ \t]*(?:INT\.|EXT\.|SCENE\b|CUT TO:|FADE IN:|CAMERA\b|ANGLE\b).*$', re.IGNORECASE | re.MULTILINE ), '' ),
            # Whitespace (or end of line) after the separator keeps "12:30" intact
            ( re.compile( r'^[ \t]*[>-]?[ \t]*(?:[^\W_]|[ \t.()\-]){1,30}?(?::|[ \t]+-)(?:[ \t]+|$)', re.MULTILINE ), '' ),
            ( re.compile( r'^[ \t]*unknown?[ \t]*$', re.IGNORECASE | re.MULTILINE ), '' ),
            ( re.compile( r'\bunknown?\b', re.IGNORECASE ), '' ),
            ( re.compile( r'^[ \t]*\d+[ \t]*$', re.MULTILINE ), '' ),
            ( re.compile( r'\s+' ), ' ' ),
        ];

    def _apply_rules( self, text: str ) -> str:
        for pattern, replacement in self.rules:
            text = pattern.sub( replacement, text );
        return text.strip();

    def clean( self, text: str ) -> str:
        """
        Remove non-dialogue content from text.

        The rule sequence is repeated until the text stops changing, so a
        label or heading exposed by a later rule (e.g. "A: B: hello") is also
        removed and cleaning stays idempotent.

        Args:
            text: Raw script or subtitle text

        Returns:
            Single line of dialogue text (empty string for empty input)
        """
        if not text:
            return "";

        cleaned = self._apply_rules( text );
        passes = 1;
        while True:
            again = self._apply_rules( cleaned );
            if again == cleaned:
                break;
            cleaned = again;
            passes += 1;

        if passes > 2:
            self.logger.debug( f"Text cleaning settled after {passes} passes" );

        return cleaned;


_cleaner = None;


def clean_text( text: str ) -> str:
    """Clean text with a shared TextCleaner instance."""
    global _cleaner;
    if _cleaner is None:
        _cleaner = TextCleaner();
    return _cleaner.clean( text );
