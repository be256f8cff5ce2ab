"""
Find and replace helpers for post-editing corrected caption text.
"""
import re
from typing import Tuple

from .errors import InvalidPatternError


def compile_pattern( find: str, match_case: bool = False, use_regex: bool = False ) -> re.Pattern:
    """
    Compile a search pattern.

    Plain searches are escaped and matched literally; with use_regex the text
    is compiled as a regular expression.

    Raises:
        InvalidPatternError: find is empty or is not a valid regular expression
    """
    if not find:
        raise InvalidPatternError( find, "search text is empty" );

    flags = 0 if match_case else re.IGNORECASE;
    source = find if use_regex else re.escape( find );
    try:
        return re.compile( source, flags );
    except re.error as e:
        raise InvalidPatternError( find, str( e ) ) from e;


def count_matches( text: str, find: str, match_case: bool = False, use_regex: bool = False ) -> int:
    """Number of non-overlapping matches of find in text."""
    if not text:
        return 0;
    pattern = compile_pattern( find, match_case, use_regex );
    return sum( 1 for _ in pattern.finditer( text ) );


def replace_all( text: str, find: str, replace: str, match_case: bool = False, use_regex: bool = False ) -> Tuple[str, int]:
    """
    Replace every match of find with the literal replace text.

    Returns:
        Tuple of (new_text, replacement_count)
    """
    pattern = compile_pattern( find, match_case, use_regex );
    return pattern.subn( lambda _match: replace, text );

