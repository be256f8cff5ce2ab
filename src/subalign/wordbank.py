"""
Built-in word bank and the two-layer dictionary used by the correction pass.

The built-in bank maps common texting slang, Hinglish spelling variants and
accent-driven ASR misspellings to a single corrected form. Callers layer
their own overrides on top; overrides win on an exact key collision and the
built-in bank is never modified.
"""
import json
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from .logging import get_logger

WORD_BANK: Mapping[str, str] = {
    # Single letters and short keys that double as initials, acronyms or names
    # ("U.S.", "H. G. Wells", "R&D", "Han") are left out

    # English texting slang
    'ur': 'your',
    'nd': 'and',
    'hw': 'how',
    'wat': 'what',
    'wht': 'what',
    'dem': 'them',
    'tho': 'though',
    'thru': 'through',
    'abt': 'about',
    'pls': 'please',
    'plz': 'please',
    'plzz': 'please',
    'pleej': 'please',
    'thx': 'thanks',
    'tnx': 'thanks',
    'bcoz': 'because',
    'becoz': 'because',
    'bcz': 'because',
    'coz': 'because',
    'cuz': 'because',
    'gud': 'good',
    'gr8': 'great',
    'b4': 'before',
    'ppl': 'people',
    'frnd': 'friend',
    'frnds': 'friends',
    'luv': 'love',
    'sry': 'sorry',
    'srsly': 'seriously',
    'tmrw': 'tomorrow',
    'tmr': 'tomorrow',
    '2day': 'today',
    'bday': 'birthday',
    'msg': 'message',
    'btw': 'by the way',
    'idk': "I don't know",
    'omg': 'oh my god',
    'gonna': 'going to',
    'wanna': 'want to',
    'gotta': 'got to',
    'dunno': "don't know",
    'lemme': 'let me',
    'gimme': 'give me',
    'kinda': 'kind of',
    'sorta': 'sort of',

    # Indian English accent spellings
    'wideo': 'video',
    'wery': 'very',
    'wegetable': 'vegetable',
    'wehicle': 'vehicle',
    'jero': 'zero',
    'prablem': 'problem',
    'problam': 'problem',
    'aksed': 'asked',
    'tution': 'tuition',
    'prepone': 'reschedule earlier',

    # Hinglish spelling variants
    'nhi': 'nahi',
    'nai': 'nahi',
    'nahin': 'nahi',
    'ky': 'kya',
    'kyaa': 'kya',
    'kyu': 'kyun',
    'kyon': 'kyun',
    'kuki': 'kyunki',
    'kyuki': 'kyunki',
    'kyonki': 'kyunki',
    'kese': 'kaise',
    'kaisey': 'kaise',
    'acha': 'accha',
    'achha': 'accha',
    'thik': 'theek',
    'bohot': 'bahut',
    'bahot': 'bahut',
    'bht': 'bahut',
    'mtlb': 'matlab',
    'kch': 'kuch',
    'yar': 'yaar',
    'pka': 'pakka',
    'jaroor': 'zaroor',
    'jaroori': 'zaroori',
    'jaruri': 'zaroori',
    'jindagi': 'zindagi',
    'muje': 'mujhe',
    'mje': 'mujhe',
    'tuje': 'tujhe',
    'mai': 'main',
    'kr': 'kar',
    'rha': 'raha',
    'rhi': 'rahi',
    'rhe': 'rahe',
    'sb': 'sab',
    'sukriya': 'shukriya',
    'shukria': 'shukriya',
    'dhanyawad': 'dhanyavaad',
    'namastey': 'namaste',
    'pesa': 'paisa',
    'chlo': 'chalo',
    'dkho': 'dekho',
    'samaj': 'samajh',
    'smjh': 'samajh',
    'lkn': 'lekin',
    'abi': 'abhi',
    'glt': 'galat',
    'jldi': 'jaldi',
    'chahie': 'chahiye',
    'chaiye': 'chahiye',
    'btao': 'batao',
    'pta': 'pata',
    'vala': 'wala',
    'vali': 'wali',
};


class Dictionary:
    """
    Two-layer correction dictionary: caller overrides on top of a static bank.

    Neither layer is mutated; merged() and the with_/without_ helpers always
    build new maps, so one Dictionary can serve concurrent callers.
    """

    def __init__( self, overrides: Optional[Mapping[str, str]] = None, bank: Mapping[str, str] = WORD_BANK ):
        self.overrides = dict( overrides or {} );
        self.bank = bank;

    def lookup( self, token: str ) -> Optional[str]:
        """Exact lookup of a token: overrides first, then the built-in bank."""
        lower = token.lower();
        if lower in self.overrides:
            return self.overrides[lower];
        if lower in self.bank:
            return self.bank[lower];
        return None;

    def merged( self ) -> Dict[str, str]:
        """New map of bank entries with overrides applied."""
        merged = dict( self.bank );
        merged.update( self.overrides );
        return merged;

    def search( self, term: str, limit: int = 50 ) -> List[Tuple[str, str]]:
        """
        Find entries whose key or value contains term (case-insensitive).

        Returns:
            Sorted (key, value) pairs, at most limit of them
        """
        if not term:
            return [];
        term = term.lower();
        matches = [
            ( key, value ) for key, value in self.merged().items()
            if term in key or term in value.lower()
        ];
        return sorted( matches )[:limit];

    def with_entry( self, slang: str, correct: str ) -> Dict[str, str]:
        """Override map with slang -> correct added (inputs trimmed, key lowercased)."""
        key = slang.lower().strip();
        value = correct.strip();
        if not key or not value:
            return dict( self.overrides );
        updated = dict( self.overrides );
        updated[key] = value;
        return updated;

    def without_entry( self, slang: str ) -> Dict[str, str]:
        """Override map with slang removed."""
        updated = dict( self.overrides );
        updated.pop( slang.lower().strip(), None );
        return updated;


def load_overrides( path: Path ) -> Dict[str, str]:
    """
    Load a user override dictionary from a JSON object file.

    Keys are lowercased and trimmed; entries with an empty key or value, or a
    non-string value, are skipped.

    Raises:
        FileNotFoundError: path does not exist
        ValueError: file does not hold a JSON object
    """
    logger = get_logger();
    path = Path( path );

    if not path.exists():
        raise FileNotFoundError( f"Dictionary file not found: {path}" );

    with open( path, 'r', encoding='utf-8' ) as f:
        data = json.load( f );

    if not isinstance( data, dict ):
        raise ValueError( f"Dictionary file must contain a JSON object: {path}" );

    overrides = {};
    skipped = 0;
    for key, value in data.items():
        if not isinstance( value, str ) or not key.strip() or not value.strip():
            skipped += 1;
            continue;
        overrides[key.lower().strip()] = value.strip();

    if skipped:
        logger.warning( f"Skipped {skipped} invalid dictionary entries in {path}" );
    logger.debug( f"Loaded {len( overrides )} custom dictionary entries from {path}" );
    return overrides;


def save_overrides( path: Path, overrides: Mapping[str, str] ):
    """Write an override dictionary as a sorted, human-editable JSON object."""
    path = Path( path );
    path.parent.mkdir( parents=True, exist_ok=True );
    with open( path, 'w', encoding='utf-8' ) as f:
        json.dump( dict( sorted( overrides.items() ) ), f, ensure_ascii=False, indent=2 );
        f.write( "\n" );
