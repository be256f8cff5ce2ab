"""
Inverse Text Normalization (ITN) for Indian English and Hinglish.

Rewrites spoken-style text into written form: currency phrases to symbols,
number words to digits, and Sanskrit-style name spellings to their
colloquial short form. Also provides Indian (lakh / crore) number formatting.
"""
import math
import re
from dataclasses import dataclass
from typing import Dict, Optional, Union

# Insertion order is processing order
CURRENCY_WORDS: Dict[str, str] = {
    'rupees': '₹',
    'rupee': '₹',
    'rs': '₹',
    'rs.': '₹',
    'inr': '₹',
    'dollars': '$',
    'dollar': '$',
    'usd': '$',
};

NUMBER_WORDS: Dict[str, int] = {
    'zero': 0, 'one': 1, 'two': 2, 'three': 3, 'four': 4,
    'five': 5, 'six': 6, 'seven': 7, 'eight': 8, 'nine': 9,
    'ten': 10, 'eleven': 11, 'twelve': 12, 'thirteen': 13, 'fourteen': 14,
    'fifteen': 15, 'sixteen': 16, 'seventeen': 17, 'eighteen': 18, 'nineteen': 19,
    'twenty': 20, 'thirty': 30, 'forty': 40, 'fifty': 50,
    'sixty': 60, 'seventy': 70, 'eighty': 80, 'ninety': 90,
    'hundred': 100, 'thousand': 1000, 'lakh': 100000, 'crore': 10000000,
    # Hindi
    'ek': 1, 'do': 2, 'teen': 3, 'char': 4, 'paanch': 5,
    'chhe': 6, 'saat': 7, 'aath': 8, 'nau': 9, 'das': 10,
    'sau': 100, 'hazaar': 1000, 'hazar': 1000,
};

# Final schwa dropped in everyday pronunciation
SCHWA_DELETIONS: Dict[str, str] = {
    'rama': 'Ram',
    'shiva': 'Shiv',
    'arjuna': 'Arjun',
    'hanumana': 'Hanuman',
    'ravana': 'Ravan',
    'mohana': 'Mohan',
    'lakshmana': 'Lakshman',
    'bharata': 'Bharat',
    'gopala': 'Gopal',
    'narayana': 'Narayan',
    'karna': 'Karan',
};

# Full form is the idiomatic one; never rewritten. "karna" is also the
# everyday Hindi verb, so the name rule above stays disabled.
SCHWA_EXCEPTIONS = frozenset( [ 'krishna', 'ganga', 'mathura', 'ayodhya', 'karna' ] );

AMOUNT = r'(\d+(?:[.,]\d+)*)';


@dataclass
class ITNOptions:
    """Toggles for the ITN passes."""

    currency: bool = True;
    number_words: bool = False;     # can change meaning ("do" the verb), opt in
    schwa_names: bool = True;


def _currency_patterns( word: str ):
    escaped = re.escape( word );
    # A trailing "." in the word is itself the right boundary
    end = '' if word.endswith( '.' ) else r'(?!\w)';
    before = re.compile( rf'{AMOUNT}[ \t]*{escaped}{end}', re.IGNORECASE );
    after = re.compile( rf'(?<!\w){escaped}[ \t]*{AMOUNT}', re.IGNORECASE );
    return before, after;


_CURRENCY_RULES = [ ( symbol, _currency_patterns( word ) ) for word, symbol in CURRENCY_WORDS.items() ];
_NUMBER_RULES = [ ( re.compile( rf'\b{word}\b', re.IGNORECASE ), str( value ) ) for word, value in NUMBER_WORDS.items() ];
_SCHWA_RULES = [
    ( re.compile( rf'\b{word}\b', re.IGNORECASE ), short )
    for word, short in SCHWA_DELETIONS.items() if word not in SCHWA_EXCEPTIONS
];


def normalize_currency( text: str ) -> str:
    """
    Convert written currency to symbol form.

    "100 rupees" -> "₹100", "rs 50" -> "₹50", "1,00,000 INR" -> "₹1,00,000".
    Amount and currency word must sit on the same line.
    """
    result = text;
    for symbol, ( before, after ) in _CURRENCY_RULES:
        replacement = symbol + r'\1';
        result = before.sub( replacement, result );
        result = after.sub( replacement, result );
    return result;


def number_words_to_digits( text: str ) -> str:
    """Replace whole-word number words with digits: "twenty" -> "20", "paanch" -> "5"."""
    result = text;
    for pattern, digits in _NUMBER_RULES:
        result = pattern.sub( digits, result );
    return result;


def apply_schwa_rules( text: str ) -> str:
    """Rewrite listed name spellings to their short form: "Rama" -> "Ram"."""
    result = text;
    for pattern, short in _SCHWA_RULES:
        result = pattern.sub( short, result );
    return result;


def apply_itn( text: str, options: Optional[ITNOptions] = None ) -> str:
    """
    Apply the enabled ITN passes in order: currency, number words, schwa names.

    Args:
        text: Input text (caption track or free text)
        options: Pass toggles; defaults to ITNOptions()

    Returns:
        Normalized text
    """
    options = options or ITNOptions();
    result = text;

    if options.currency:
        result = normalize_currency( result );
    if options.number_words:
        result = number_words_to_digits( result );
    if options.schwa_names:
        result = apply_schwa_rules( result );

    return result;


def group_indian( value: Union[int, float, str] ) -> str:
    """
    Format an integer with Indian digit grouping.

    The last three digits form one group, the rest are grouped in pairs:
    1234567 -> "12,34,567", 999 -> "999". Floats are floored.
    """
    if isinstance( value, str ):
        digits = value.strip().replace( ',', '' );
        sign = '';
        if digits.startswith( '-' ):
            sign, digits = '-', digits[1:];
        if not digits.isdigit():
            raise ValueError( f"Not a decimal digit string: {value!r}" );
        digits = digits.lstrip( '0' ) or '0';
    else:
        number = math.floor( value );
        sign = '-' if number < 0 else '';
        digits = str( abs( number ) );

    if len( digits ) <= 3:
        return sign + digits;

    head, tail = digits[:-3], digits[-3:];
    pairs = [];
    while head:
        pairs.insert( 0, head[-2:] );
        head = head[:-2];

    return sign + ",".join( pairs + [ tail ] );


def _trim( value: float, decimals: int ) -> str:
    if value % 1 == 0:
        return str( int( value ) );
    return f"{value:.{decimals}f}";


def format_indian_magnitude( value: Union[int, float] ) -> str:
    """
    Human-readable magnitude label: 1500000 -> "15 Lakh", 25000000 -> "2.50 Crore".

    Thousands get a "K" suffix ("1.5K"); values under 1000 are returned as is.
    """
    if value >= 10000000:
        return f"{_trim( value / 10000000, 2 )} Crore";
    if value >= 100000:
        return f"{_trim( value / 100000, 2 )} Lakh";
    if value >= 1000:
        return f"{_trim( value / 1000, 1 )}K";
    return _trim( value, 2 ) if isinstance( value, float ) else str( value );
