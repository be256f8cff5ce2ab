"""
Alignment engine: moves ground-truth script words into the timing of a caption track.
"""
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple
import Levenshtein

from .cleaner import TextCleaner
from .corrector import apply_dictionary
from .diff import DiffKind, DiffSegment, diff_words
from .errors import EmptyInputError, EmptyScriptAfterCleaningError, NoParseableBlocksError
from .itn import ITNOptions, apply_itn
from .subtitles import CaptionParser, WordIndexEntry, build_word_index, extract_text, looks_like_caption_track
from .logging import get_logger


@dataclass
class AlignmentResult:
    """Corrected caption track plus statistics about the alignment."""

    original_track: str;        # Caption track as supplied
    corrected_track: str;       # Aligned, normalized caption track
    changes_count: int;         # Words inserted from or dropped for the script
    initial_score: int;         # % of script words present before alignment
    final_score: int;           # % of script words present after alignment
    similarity: float;          # Levenshtein ratio of final caption text vs script (0.0-1.0)

    def __repr__( self ):
        return f"AlignmentResult(changes={self.changes_count}, " \
               f"match={self.initial_score}% -> {self.final_score}%, similarity={self.similarity:.2f})";


def rebucket( segments: List[DiffSegment], word_index: List[WordIndexEntry], block_count: int ) -> List[List[str]]:
    """
    Distribute diff output over caption blocks.

    A single pass threads two pieces of state: the cursor into the caption
    word stream and the current block index.
    - ONLY_IN_TARGET words are appended to the current block.
    - ONLY_IN_SOURCE words advance the cursor (moving the current block to the
      word's origin block) and are dropped.
    - UNCHANGED words advance the cursor the same way and are appended to the
      block they came from.
    Advancing past the end of the caption stream is a no-op, so trailing
    script words land in the last block that held caption content.

    Args:
        segments: Diff of caption words (source) against script words (target)
        word_index: Flattened caption words with their block indices
        block_count: Number of caption blocks

    Returns:
        One word list per block
    """
    buckets: List[List[str]] = [ [] for _ in range( block_count ) ];
    if block_count == 0:
        return buckets;

    cursor = 0;
    current_block = 0;

    for segment in segments:
        for word in segment.words:
            if segment.kind != DiffKind.ONLY_IN_TARGET and cursor < len( word_index ):
                current_block = word_index[cursor].block_index;
                cursor += 1;

            if segment.kind != DiffKind.ONLY_IN_SOURCE:
                buckets[current_block].append( word );

    return buckets;


def calculate_match_score( source: str, target: str ) -> int:
    """
    Percentage of target words found, in order, in source.

    Words are lowercased and split on whitespace; the count of words in the
    longest common subsequence is divided by the target word count.

    Returns:
        Integer percentage 0-100 (0 if either text is empty)
    """
    if not source or not target:
        return 0;

    source_words = source.lower().split();
    target_words = target.lower().split();
    if not source_words or not target_words:
        return 0;

    matches = sum(
        len( segment.words ) for segment in diff_words( source_words, target_words )
        if segment.kind == DiffKind.UNCHANGED
    );
    return min( 100, round( matches / len( target_words ) * 100 ) );


def calculate_levenshtein_similarity( text1: str, text2: str ) -> Tuple[int, float]:
    """
    Calculate basic Levenshtein distance and similarity score.

    Args:
        text1: First text string
        text2: Second text string

    Returns:
        Tuple of (levenshtein_distance, similarity_score)
        similarity_score = 1 - (distance / max_length)
    """
    if not text1 and not text2:
        return 0, 1.0;
    if not text1 or not text2:
        return max( len( text1 or "" ), len( text2 or "" ) ), 0.0;

    distance = Levenshtein.distance( text1, text2 );
    max_length = max( len( text1 ), len( text2 ) );

    return distance, 1.0 - ( distance / max_length );


class AlignmentEngine:
    """
    Alignment engine for correcting caption text against a ground-truth script.

    The script is authoritative: caption words it does not contain are dropped
    from the output, script words the caption lacks are inserted into the block
    whose matching context precedes them. Block ids and time ranges are never
    changed.

    A block left with no words is still emitted, as id and time range followed
    by an empty text line. parse_track drops such blocks, so feeding the output
    back through correct_only or align loses their timing.
    """

    def __init__( self, itn_options: Optional[ITNOptions] = None, cleaner: Optional[TextCleaner] = None ):
        self.logger = get_logger();
        self.itn_options = itn_options or ITNOptions();
        self.cleaner = cleaner or TextCleaner();
        self.parser = CaptionParser( cleaner=self.cleaner );

    def align( self, caption_track: str, script_text: str, overrides: Optional[Mapping[str, str]] = None ) -> str:
        """
        Replace the words of a caption track with the words of a script.

        Args:
            caption_track: Raw caption track text
            script_text: Ground-truth script, free text
            overrides: Caller dictionary layered over the built-in word bank

        Returns:
            Corrected caption track text

        Raises:
            EmptyInputError: caption track or script is empty
            NoParseableBlocksError: caption track has no well-formed block
            EmptyScriptAfterCleaningError: script has no words once cleaned
        """
        corrected, _ = self._align( caption_track, script_text, overrides );
        return corrected;

    def _align( self, caption_track: str, script_text: str, overrides: Optional[Mapping[str, str]] ) -> Tuple[str, int]:
        """Run the alignment; returns (corrected track, changed word count)."""
        if not caption_track or not caption_track.strip():
            raise EmptyInputError( "Source SRT file content is empty." );
        if not script_text or not script_text.strip():
            raise EmptyInputError( "Correct Script content is empty." );

        # Fix known typos before parsing so block cleaning sees corrected words
        corrected_track = apply_dictionary( caption_track, overrides );

        blocks = self.parser.parse( corrected_track );
        if not blocks:
            raise NoParseableBlocksError();

        script_words = self.cleaner.clean( script_text ).split();
        if not script_words:
            raise EmptyScriptAfterCleaningError();

        word_index = build_word_index( blocks );
        caption_words = [ entry.word for entry in word_index ];

        self.logger.info( f"Aligning {len( caption_words )} caption words in {len( blocks )} blocks " \
                          f"with {len( script_words )} script words" );

        segments = diff_words( caption_words, script_words );
        changes_count = sum(
            len( segment.words ) for segment in segments if segment.kind != DiffKind.UNCHANGED
        );
        self.logger.debug( f"Word diff: {len( segments )} segments, {changes_count} changed words" );

        buckets = rebucket( segments, word_index, len( blocks ) );
        for block, words in zip( blocks, buckets ):
            block.text = " ".join( words );

        empty_blocks = sum( 1 for block in blocks if not block.text );
        if empty_blocks:
            self.logger.debug( f"{empty_blocks} blocks left without text after alignment" );

        return apply_itn( self.parser.serialize( blocks ), self.itn_options ), changes_count;

    def correct_only( self, caption_text: str, overrides: Optional[Mapping[str, str]] = None ) -> str:
        """
        Apply word bank corrections without a reference script.

        Caption tracks are reparsed and reserialized to tidy their formatting;
        anything else is treated as free text and ITN-normalized.

        Raises:
            EmptyInputError: input is empty
        """
        if not caption_text or not caption_text.strip():
            raise EmptyInputError( "Source content is empty." );

        corrected = apply_dictionary( caption_text, overrides );

        if looks_like_caption_track( caption_text ):
            blocks = self.parser.parse( corrected );
            if blocks:
                self.logger.info( f"Corrected {len( blocks )} caption blocks" );
                return self.parser.serialize( blocks );
            self.logger.warning( "Input has time ranges but no valid blocks, correcting as free text" );

        return apply_itn( corrected, self.itn_options );

    def align_track( self, caption_track: str, script_text: str, overrides: Optional[Mapping[str, str]] = None ) -> AlignmentResult:
        """Run align() and collect before/after statistics."""
        corrected, changes_count = self._align( caption_track, script_text, overrides );

        clean_script = self.cleaner.clean( script_text );
        final_text = extract_text( corrected );
        distance, similarity = calculate_levenshtein_similarity( final_text, clean_script );

        result = AlignmentResult(
            original_track=caption_track,
            corrected_track=corrected,
            changes_count=changes_count,
            initial_score=calculate_match_score( extract_text( caption_track ), clean_script ),
            final_score=calculate_match_score( final_text, clean_script ),
            similarity=similarity
        );

        self.logger.debug( f"Levenshtein distance to script: {distance}" );
        return result;

    def display_result( self, result: AlignmentResult ):
        """Log alignment statistics."""
        self.logger.info( "=== ALIGNMENT RESULTS ===" );
        self.logger.info( f"  Changed words: {result.changes_count}" );
        self.logger.info( f"  Script match: {result.initial_score}% -> {result.final_score}%" );
        self.logger.info( f"  Similarity to script: {result.similarity:.1%}" );
