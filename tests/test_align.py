"""
Test cases for the alignment engine.
"""
import pytest
from pathlib import Path
import sys

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

from subalign.align import (
    AlignmentEngine,
    AlignmentResult,
    calculate_levenshtein_similarity,
    calculate_match_score,
    rebucket,
)
from subalign.diff import DiffKind, DiffSegment
from subalign.errors import (
    EmptyInputError,
    EmptyScriptAfterCleaningError,
    NoParseableBlocksError,
    SubAlignError,
)
from subalign.itn import ITNOptions
from subalign.subtitles import WordIndexEntry, parse_track

TIME_1 = "00:00:01,000 --> 00:00:02,000";
TIME_2 = "00:00:03,000 --> 00:00:04,000";
TIME_3 = "00:00:05,000 --> 00:00:06,500";


def make_track( *texts ):
    """Build a caption track with one block per text."""
    times = [ TIME_1, TIME_2, TIME_3 ];
    return "\n\n".join( f"{i + 1}\n{times[i]}\n{text}" for i, text in enumerate( texts ) );


class TestAlign:
    """Test the main alignment operation."""

    def setup_method( self ):
        self.engine = AlignmentEngine();

    def test_single_block_scenario( self ):
        """Script wording and punctuation replace the caption words."""
        result = self.engine.align( make_track( "Hello sir how are you" ), "Hello sir, how r u" );
        assert result == f"1\n{TIME_1}\nHello sir, how r u";

    def test_identical_text_is_unchanged( self ):
        track = make_track( "hello everyone", "welcome back" );
        assert self.engine.align( track, "hello everyone welcome back" ) == track;

    def test_structure_preserved( self ):
        """Block count, ids and time ranges survive alignment verbatim."""
        track = "7\n00:00:01,000 --> 00:00:02,500\nhello everyone\n\n" \
                "12\n00:01:00,250 --> 00:01:02,000\nwelcome back";
        result = self.engine.align( track, "Hello everyone, welcome back" );

        blocks = parse_track( result );
        assert [ block.id for block in blocks ] == [ "7", "12" ];
        assert [ block.time_range for block in blocks ] == [
            "00:00:01,000 --> 00:00:02,500",
            "00:01:00,250 --> 00:01:02,000",
        ];
        assert blocks[0].text == "Hello everyone,";
        assert blocks[1].text == "welcome back";

    def test_insertion_goes_to_preceding_block( self ):
        track = make_track( "we are going", "to the market" );
        result = self.engine.align( track, "we are going to the big market" );
        assert result == make_track( "we are going", "to the big market" );

    def test_insertion_at_block_boundary( self ):
        """A script word between two blocks follows the block before it."""
        track = make_track( "hello everyone", "welcome back" );
        result = self.engine.align( track, "hello everyone and welcome back" );
        assert result == make_track( "hello everyone and", "welcome back" );

    def test_trailing_script_words_land_in_last_block( self ):
        track = make_track( "hello everyone", "welcome back" );
        result = self.engine.align( track, "hello everyone welcome back today" );
        assert result == make_track( "hello everyone", "welcome back today" );

    def test_leading_script_words_land_in_first_block( self ):
        track = make_track( "hello everyone", "welcome back" );
        result = self.engine.align( track, "so hello everyone welcome back" );
        assert result == make_track( "so hello everyone", "welcome back" );

    def test_caption_only_words_are_dropped( self ):
        track = make_track( "um hello everyone", "welcome back" );
        result = self.engine.align( track, "hello everyone welcome back" );
        assert result == make_track( "hello everyone", "welcome back" );

    def test_block_emptied_by_alignment_is_kept( self ):
        track = make_track( "hello everyone", "uh huh", "welcome back" );
        result = self.engine.align( track, "hello everyone welcome back" );
        assert result == f"1\n{TIME_1}\nhello everyone\n\n2\n{TIME_2}\n\n\n3\n{TIME_3}\nwelcome back";

        # Reparsing drops the empty block along with its timing
        assert [ block.id for block in parse_track( result ) ] == [ "1", "3" ];

    def test_caption_is_cleaned_before_alignment( self ):
        track = make_track( "JOHN: [laughs] hello everyone" );
        assert self.engine.align( track, "hello everyone" ) == make_track( "hello everyone" );

    def test_script_is_cleaned_before_alignment( self ):
        track = make_track( "hello everyone" );
        script = "INT. STUDIO - DAY\nHOST: hello (smiles) everyone\nhttps://example.com";
        assert self.engine.align( track, script ) == make_track( "hello everyone" );

    def test_dictionary_pass_runs_on_caption( self ):
        track = make_track( "hello frnd" );
        assert self.engine.align( track, "hello friend" ) == make_track( "hello friend" );

    def test_overrides_take_precedence( self ):
        track = make_track( "hello frnd" );
        result = self.engine.align( track, "hello buddy", overrides={ "frnd": "buddy" } );
        assert result == make_track( "hello buddy" );

    def test_itn_applied_to_output( self ):
        track = make_track( "it costs 100 rupees" );
        assert self.engine.align( track, "it costs 100 rupees" ) == make_track( "it costs ₹100" );

    def test_itn_options_respected( self ):
        engine = AlignmentEngine( itn_options=ITNOptions( currency=False, schwa_names=False ) );
        track = make_track( "Rama paid 100 rupees" );
        assert engine.align( track, "Rama paid 100 rupees" ) == track;

    def test_crlf_track( self ):
        track = make_track( "hello everyone", "welcome back" ).replace( "\n", "\r\n" );
        result = self.engine.align( track, "hello everyone welcome back" );
        assert result == make_track( "hello everyone", "welcome back" );


class TestAlignErrors:
    """Test alignment failure modes."""

    def setup_method( self ):
        self.engine = AlignmentEngine();

    @pytest.mark.parametrize( "track, script, message", [
        ( "", "hello", "Source SRT file content is empty." ),
        ( "   \n ", "hello", "Source SRT file content is empty." ),
        ( make_track( "hello" ), "", "Correct Script content is empty." ),
        ( make_track( "hello" ), "\n\t", "Correct Script content is empty." ),
    ] )
    def test_empty_inputs( self, track, script, message ):
        with pytest.raises( EmptyInputError ) as exc_info:
            self.engine.align( track, script );
        assert str( exc_info.value ) == message;

    def test_no_parseable_blocks( self ):
        with pytest.raises( NoParseableBlocksError ):
            self.engine.align( "just some text", "hello" );

    def test_script_empty_after_cleaning( self ):
        with pytest.raises( EmptyScriptAfterCleaningError ):
            self.engine.align( make_track( "hello" ), "INT. HOUSE - DAY\n[music]\n42" );

    def test_errors_share_base_class( self ):
        with pytest.raises( SubAlignError ):
            self.engine.align( "just some text", "hello" );


class TestCorrectOnly:
    """Test correction without a reference script."""

    def setup_method( self ):
        self.engine = AlignmentEngine();

    def test_caption_track_corrected_without_itn( self ):
        track = f"1\n{TIME_1}\nJOHN: plz pay 100 rupees\n\n2\n{TIME_2}\nthx";
        result = self.engine.correct_only( track );
        assert result == f"1\n{TIME_1}\nplease pay 100 rupees\n\n2\n{TIME_2}\nthanks";

    def test_free_text_gets_itn( self ):
        assert self.engine.correct_only( "I paid 100 rupees" ) == "I paid ₹100";

    def test_free_text_corrections( self ):
        assert self.engine.correct_only( "thx, plz come tmrw" ) == "thanks, please come tomorrow";

    def test_overrides( self ):
        assert self.engine.correct_only( "plz wait", { "plz": "kindly" } ) == "kindly wait";

    def test_unknown_tokens_retained( self ):
        assert self.engine.correct_only( "xyzzy qwrt" ) == "xyzzy qwrt";

    def test_empty_input( self ):
        with pytest.raises( EmptyInputError ):
            self.engine.correct_only( "  " );


class TestAlignTrack:
    """Test alignment statistics."""

    def test_scores( self ):
        engine = AlignmentEngine();
        result = engine.align_track( make_track( "thx bro" ), "thanks bro" );

        assert isinstance( result, AlignmentResult );
        assert result.original_track == make_track( "thx bro" );
        assert result.corrected_track == make_track( "thanks bro" );
        assert result.changes_count == 0;
        assert result.initial_score == 50;
        assert result.final_score == 100;
        assert result.similarity == 1.0;

    def test_changes_counted( self ):
        result = AlignmentEngine().align_track( make_track( "Hello sir how are you" ), "Hello sir, how r u" );
        # sir / are / you removed, sir, / r / u added
        assert result.changes_count == 6;
        assert result.final_score == 100;

    def test_repr( self ):
        result = AlignmentEngine().align_track( make_track( "hello" ), "hello" );
        assert "changes=0" in repr( result );


class TestRebucket:
    """Test distribution of diff output over blocks."""

    def test_rebucket_directly( self ):
        index = [
            WordIndexEntry( "a", 0 ),
            WordIndexEntry( "b", 0 ),
            WordIndexEntry( "c", 1 ),
        ];
        segments = [
            DiffSegment( DiffKind.UNCHANGED, [ "a" ] ),
            DiffSegment( DiffKind.ONLY_IN_SOURCE, [ "b" ] ),
            DiffSegment( DiffKind.ONLY_IN_TARGET, [ "x", "y" ] ),
            DiffSegment( DiffKind.UNCHANGED, [ "c" ] ),
            DiffSegment( DiffKind.ONLY_IN_TARGET, [ "z" ] ),
        ];
        assert rebucket( segments, index, 2 ) == [ [ "a", "x", "y" ], [ "c", "z" ] ];

    def test_rebucket_no_blocks( self ):
        assert rebucket( [ DiffSegment( DiffKind.ONLY_IN_TARGET, [ "x" ] ) ], [], 0 ) == [];

    def test_rebucket_does_not_mutate_inputs( self ):
        index = [ WordIndexEntry( "a", 0 ) ];
        segments = [ DiffSegment( DiffKind.UNCHANGED, [ "a" ] ) ];
        rebucket( segments, index, 1 );
        assert segments[0].words == [ "a" ];
        assert index[0] == WordIndexEntry( "a", 0 );


class TestScores:
    """Test match score and similarity helpers."""

    @pytest.mark.parametrize( "source, target, expected", [
        ( "", "hello", 0 ),
        ( "hello", "", 0 ),
        ( "a b c", "a b c d", 75 ),
        ( "A B", "a b", 100 ),
        ( "a b c d e", "a b", 100 ),
        ( "x y", "a b", 0 ),
    ] )
    def test_match_score( self, source, target, expected ):
        assert calculate_match_score( source, target ) == expected;

    def test_levenshtein_similarity( self ):
        assert calculate_levenshtein_similarity( "", "" ) == ( 0, 1.0 );
        assert calculate_levenshtein_similarity( "abc", "" ) == ( 3, 0.0 );

        distance, similarity = calculate_levenshtein_similarity( "kitten", "sitting" );
        assert distance == 3;
        assert similarity == pytest.approx( 1 - 3 / 7 );


if __name__ == '__main__':
    pytest.main( [ __file__ ] );
