"""
Phonetic normalization for Indian English and Hinglish.

Maps accent variants ("wideo" / "video", "jaroori" / "zaroori") onto a common
key so dictionary lookups tolerate spelling that follows pronunciation.
"""
import re
from typing import Dict, List, Optional, Tuple

PUNCTUATION_RE = re.compile( r"[.,/#!$%^&*;:{}=\-_`~()]" );

# Applied in order; later rules see the output of earlier ones
PHONETIC_RULES: List[Tuple[str, str]] = [
    ( 'v', 'w' ),       # v/w confusion
    ( 'ph', 'f' ),
    ( 'chh', 'ch' ),    # aspirated consonants
    ( 'kh', 'k' ),
    ( 'gh', 'g' ),
    ( 'jh', 'j' ),
    ( 'th', 'd' ),      # "that" -> "dat"
    ( 'dh', 'd' ),
    ( 'bh', 'b' ),
    ( 'z', 'j' ),       # "zaroori" -> "jaroori"
    ( 'ee', 'i' ),      # long vowels
    ( 'oo', 'u' ),
    ( 'aa', 'a' ),
    ( 'sh', 's' ),
];

MIN_KEY_LENGTH = 4;


def normalize_word( word: str ) -> str:
    """
    Build the phonetic key for a word.

    Lowercases, strips punctuation, applies PHONETIC_RULES in order, then drops
    a trailing 'h' and a trailing schwa 'a' as long as MIN_KEY_LENGTH
    characters remain.
    """
    if not word:
        return '';

    key = PUNCTUATION_RE.sub( '', word.lower() );
    for source, target in PHONETIC_RULES:
        key = key.replace( source, target );

    if len( key ) > MIN_KEY_LENGTH and key.endswith( 'h' ):
        key = key[:-1];
    if len( key ) > MIN_KEY_LENGTH and key.endswith( 'a' ):
        key = key[:-1];

    return key;


def is_fuzzy_match( word_a: str, word_b: str ) -> bool:
    """True if the words are equal ignoring case or share a phonetic key."""
    if word_a == word_b:
        return True;
    if word_a.lower() == word_b.lower():
        return True;
    return normalize_word( word_a ) == normalize_word( word_b );


def find_phonetic_match( word: str, dictionary: Dict[str, str] ) -> Optional[str]:
    """
    Find the first dictionary key that sounds like word.

    Linear scan in dictionary insertion order; use build_phonetic_index when
    looking up many words against the same dictionary.

    Returns:
        Matching dictionary key, or None
    """
    target = normalize_word( word );
    if not target:
        return None;

    for key in dictionary:
        if normalize_word( key ) == target:
            return key;
    return None;


def build_phonetic_index( dictionary: Dict[str, str] ) -> Dict[str, str]:
    """
    Precompute phonetic key -> first dictionary key with that key.

    Lookups through the index give the same answer as find_phonetic_match.
    """
    index: Dict[str, str] = {};
    for key in dictionary:
        phonetic_key = normalize_word( key );
        if phonetic_key:
            index.setdefault( phonetic_key, key );
    return index;
