"""
Caption track parsing and serialization for SRT-style block text.
"""
import re
from dataclasses import dataclass
from typing import List

from .cleaner import TextCleaner
from .logging import get_logger

TIME_RANGE_RE = re.compile( r'\d{2}:\d{2}:\d{2},\d{3}\s*-->\s*\d{2}:\d{2}:\d{2},\d{3}' );
SEQUENCE_LINE_RE = re.compile( r'^\d+$', re.MULTILINE );
TIME_RANGE_LINE_RE = re.compile( r'^\d{2}:\d{2}:\d{2},\d{3} --> \d{2}:\d{2}:\d{2},\d{3}$', re.MULTILINE );
BLOCK_SEPARATOR_RE = re.compile( r'\n(?:[ \t]*\n)+' );


class CaptionBlock:
    """Represents a single caption block: id, time range and dialogue text."""

    def __init__( self, block_id: str, time_range: str, text: str ):
        self.id = block_id;              # Sequence identifier, kept verbatim
        self.time_range = time_range;    # Time range line, kept verbatim
        self.text = text;                # Cleaned dialogue text

    @property
    def words( self ) -> List[str]:
        """Whitespace-delimited tokens of the block text."""
        return self.text.split();

    def __repr__( self ):
        return f"CaptionBlock(id={self.id!r}, time={self.time_range!r}, text='{self.text[:30]}...')";


@dataclass
class WordIndexEntry:
    """A caption word tagged with the index of the block it came from."""

    word: str;
    block_index: int;


class CaptionParser:
    """
    Caption track parser and serializer.

    Features:
    - CRLF / CR line ending normalization
    - Blank-line block splitting
    - Malformed blocks (fewer than 3 lines) dropped
    - Per-block text cleaning (speaker labels, directions, artifacts)
    - Id and time range preserved byte-for-byte
    """

    def __init__( self, cleaner: TextCleaner = None ):
        self.logger = get_logger();
        self.cleaner = cleaner or TextCleaner();

    def parse( self, track: str ) -> List[CaptionBlock]:
        """
        Parse a caption track into CaptionBlock objects.

        Args:
            track: Raw caption track text

        Returns:
            List of well-formed blocks in original order (may be empty)
        """
        if not track:
            return [];

        normalized = track.replace( '\r\n', '\n' ).replace( '\r', '\n' ).strip( '\n' );
        chunks = BLOCK_SEPARATOR_RE.split( normalized );

        blocks = [];
        dropped = 0;
        for chunk in chunks:
            lines = chunk.strip( '\n' ).split( '\n' );
            if len( lines ) < 3:
                dropped += 1;
                continue;

            text = " ".join( lines[2:] );
            blocks.append( CaptionBlock( lines[0], lines[1], self.cleaner.clean( text ) ) );

        if dropped:
            self.logger.debug( f"Dropped {dropped} malformed caption blocks" );
        self.logger.debug( f"Parsed {len( blocks )} caption blocks" );
        return blocks;

    def serialize( self, blocks: List[CaptionBlock] ) -> str:
        """Render blocks as caption track text, separated by blank lines."""
        return "\n\n".join( f"{block.id}\n{block.time_range}\n{block.text}" for block in blocks );


def parse_track( track: str ) -> List[CaptionBlock]:
    """Parse a caption track with a default CaptionParser."""
    return CaptionParser().parse( track );


def serialize_track( blocks: List[CaptionBlock] ) -> str:
    """Serialize blocks with a default CaptionParser."""
    return CaptionParser().serialize( blocks );


def looks_like_caption_track( text: str ) -> bool:
    """True if text contains an HH:MM:SS,mmm --> HH:MM:SS,mmm time range."""
    return bool( text ) and TIME_RANGE_RE.search( text ) is not None;


def build_word_index( blocks: List[CaptionBlock] ) -> List[WordIndexEntry]:
    """Flatten block words into one stream, tagging each with its block index."""
    index = [];
    for block_index, block in enumerate( blocks ):
        for word in block.words:
            index.append( WordIndexEntry( word=word, block_index=block_index ) );
    return index;


def extract_text( track: str ) -> str:
    """
    Extract plain dialogue text from a caption track.

    Drops sequence-number lines and time range lines, then collapses
    whitespace. Text is not otherwise cleaned.
    """
    if not track:
        return "";
    text = track.replace( '\r\n', '\n' );
    text = SEQUENCE_LINE_RE.sub( '', text );
    text = TIME_RANGE_LINE_RE.sub( '', text );
    return re.sub( r'\s+', ' ', text ).strip();
