"""
Word bank correction pass: replaces known slang, typos and accent spellings.
"""
import re
from typing import Mapping, Optional

from .phonetics import build_phonetic_index, normalize_word
from .wordbank import WORD_BANK

WORD_BOUNDARY_RE = re.compile( r'\b' );
WORD_LIKE_RE = re.compile( r'\w' );
ALPHA_RE = re.compile( r'^[a-zA-Z]+$' );


def apply_dictionary( text: str, overrides: Optional[Mapping[str, str]] = None, bank: Mapping[str, str] = WORD_BANK ) -> str:
    """
    Apply dictionary corrections to text.

    Text is split on word boundaries so punctuation and whitespace stay as
    separate tokens and come back unchanged. Each word-like token is looked
    up in order:
    1. Exact match in overrides
    2. Exact match in the built-in bank
    3. Phonetic match against bank + overrides (alphabetic tokens longer
       than 2 characters only)
    The first hit wins; unmatched tokens are kept as they are.

    Args:
        text: Raw text, caption track or free text
        overrides: Caller dictionary (lowercase key -> replacement)
        bank: Built-in dictionary

    Returns:
        Corrected text
    """
    if not text:
        return "";

    overrides = overrides or {};
    merged = dict( bank );
    merged.update( overrides );
    phonetic_index = None;

    tokens = WORD_BOUNDARY_RE.split( text );
    corrected = [];

    for token in tokens:
        if not token or not WORD_LIKE_RE.search( token ):
            corrected.append( token );
            continue;

        lower = token.lower();

        if lower in overrides:
            corrected.append( overrides[lower] );
            continue;

        if lower in bank:
            corrected.append( bank[lower] );
            continue;

        if len( token ) > 2 and ALPHA_RE.match( token ):
            if phonetic_index is None:
                phonetic_index = build_phonetic_index( merged );
            key = phonetic_index.get( normalize_word( lower ) );
            if key is not None:
                corrected.append( merged[key] );
                continue;

        corrected.append( token );

    return "".join( corrected );
