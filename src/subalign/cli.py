"""
CLI entry point for SubAlign with argument parsing and environment variable loading.
"""
import argparse
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

from . import __version__
from .logging import setup_logging


class SubAlignCLI:
    """
    Command line interface for SubAlign caption correction.

    Supports command line arguments with environment variable defaults
    for the custom dictionary location.
    """

    def __init__( self ):
        self.parser = self._create_parser();
        self.args = None;
        self.logger = None;
        self.dictionary_file = None;

    def _create_parser( self ):
        """Create argument parser with all SubAlign options."""
        parser = argparse.ArgumentParser(
            prog="subalign",
            description="Align caption text with a ground-truth script and fix Hinglish slang, typos and number formats",
            epilog="Environment variables: SUBALIGN_DICTIONARY, SUBALIGN_LOG_DIR, SUBALIGN_BACKUP_DIR"
        );

        parser.add_argument(
            "--srt", "--sub", "--subtitle", "-s",
            type=Path,
            default=None,
            dest="subtitle",
            help="Path to caption file (SRT-style blocks), required unless --search-bank is used"
        );

        parser.add_argument(
            "--script", "-t",
            type=Path,
            default=None,
            help="Path to the correct script; without it only word bank corrections are applied"
        );

        parser.add_argument(
            "--output", "-o",
            type=Path,
            default=None,
            help="Output file (default: <subtitle>.aligned.srt next to the input)"
        );

        parser.add_argument(
            "--dict", "-d",
            type=Path,
            default=None,
            dest="dictionary",
            help="Custom dictionary JSON file ({\"slang\": \"Correct\"}); overrides the built-in word bank"
        );

        # ITN toggles
        parser.add_argument(
            "--number-words",
            action="store_true",
            help="Convert number words to digits (off by default, may change meaning)"
        );

        parser.add_argument(
            "--no-currency",
            action="store_true",
            help="Keep currency phrases like '100 rupees' as written"
        );

        parser.add_argument(
            "--no-schwa",
            action="store_true",
            help="Keep Sanskrit-style name spellings like 'Rama' as written"
        );

        # Post-edit find / replace
        parser.add_argument(
            "--find",
            default=None,
            help="Text to find in the corrected output"
        );

        parser.add_argument(
            "--replace",
            default=None,
            help="Replacement for --find (literal text)"
        );

        parser.add_argument(
            "--regex",
            action="store_true",
            help="Treat --find as a regular expression"
        );

        parser.add_argument(
            "--match-case",
            action="store_true",
            help="Case-sensitive --find"
        );

        parser.add_argument(
            "--search-bank",
            default=None,
            metavar="TERM",
            help="List dictionary entries containing TERM and exit"
        );

        parser.add_argument(
            "--add-entry",
            action="append",
            default=None,
            metavar="SLANG=CORRECT",
            help="Add or update an entry in the custom dictionary file (repeatable)"
        );

        parser.add_argument(
            "--remove-entry",
            action="append",
            default=None,
            metavar="SLANG",
            help="Remove an entry from the custom dictionary file (repeatable)"
        );

        # Mode flags
        parser.add_argument(
            "--debug",
            action="store_true",
            help="Enable debug mode with verbose output"
        );

        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Print the result instead of writing the output file"
        );

        return parser;

    def _load_environment( self ):
        """Load environment variables from .env file and system."""
        env_file = Path( ".env" );
        if env_file.exists():
            load_dotenv( env_file );

        dictionary_path = os.getenv( "SUBALIGN_DICTIONARY" );
        self.dictionary_file = Path( dictionary_path ) if dictionary_path else None;

    def _validate_arguments( self ):
        """Validate parsed arguments and environment setup."""
        errors = [];
        editing = bool( self.args.add_entry or self.args.remove_entry );

        if editing:
            if self.args.dictionary is None:
                errors.append( "--add-entry/--remove-entry require --dict or SUBALIGN_DICTIONARY" );
            for entry in self.args.add_entry or []:
                slang, separator, correct = entry.partition( "=" );
                if not separator or not slang.strip() or not correct.strip():
                    errors.append( f"Invalid --add-entry {entry!r}, expected SLANG=CORRECT" );
        elif self.args.dictionary and not self.args.dictionary.exists():
            errors.append( f"Dictionary file not found: {self.args.dictionary}" );

        # Dictionary-only runs need no caption file
        if self.args.search_bank is not None or ( editing and self.args.subtitle is None ):
            return errors;

        if self.args.subtitle is None:
            errors.append( "Subtitle file is required (--srt)" );
        elif not self.args.subtitle.exists():
            errors.append( f"Subtitle file not found: {self.args.subtitle}" );

        if self.args.script and not self.args.script.exists():
            errors.append( f"Script file not found: {self.args.script}" );

        if self.args.replace is not None and not self.args.find:
            errors.append( "--replace requires --find" );

        return errors;

    def parse_args( self, argv=None ):
        """Parse command line arguments and validate configuration."""
        self.args = self.parser.parse_args( argv );

        self.logger = setup_logging( debug=self.args.debug );

        self._load_environment();
        if self.args.dictionary is None:
            self.args.dictionary = self.dictionary_file;

        errors = self._validate_arguments();
        if errors:
            self.logger.error( "Configuration errors:" );
            for error in errors:
                self.logger.error( f"  - {error}" );
            sys.exit( 1 );

        self.logger.info( f"SubAlign v{__version__} starting..." );
        self.logger.debug( f"Subtitles: {self.args.subtitle}" );
        self.logger.debug( f"Script: {self.args.script or '(none, word bank only)'}" );
        self.logger.debug( f"Dictionary: {self.args.dictionary or '(built-in only)'}" );

        return self.args;

    def get_output_path( self ) -> Path:
        """Output path from --output or derived from the subtitle file name."""
        if self.args.output:
            return self.args.output;
        subtitle = self.args.subtitle;
        return subtitle.parent / f"{subtitle.stem}.aligned{subtitle.suffix or '.srt'}";


def read_text( path: Path ) -> str:
    """Read a UTF-8 text file, dropping a leading byte order mark."""
    with open( path, 'r', encoding='utf-8-sig' ) as f:
        return f.read();


def main( argv=None ):
    """Main entry point for the SubAlign CLI."""
    from .align import AlignmentEngine;
    from .backup import BackupManager;
    from .errors import SubAlignError;
    from .itn import ITNOptions;
    from .search import replace_all, count_matches;
    from .wordbank import Dictionary, load_overrides, save_overrides;

    cli = SubAlignCLI();
    args = cli.parse_args( argv );

    try:
        # A file named by --add-entry may not exist yet
        overrides = load_overrides( args.dictionary ) if args.dictionary and args.dictionary.exists() else {};
    except ( OSError, ValueError ) as e:
        cli.logger.error( f"Could not load dictionary: {e}" );
        sys.exit( 1 );

    if args.add_entry or args.remove_entry:
        dictionary = Dictionary( overrides );
        for entry in args.add_entry or []:
            slang, _, correct = entry.partition( "=" );
            dictionary = Dictionary( dictionary.with_entry( slang, correct ) );
        for slang in args.remove_entry or []:
            dictionary = Dictionary( dictionary.without_entry( slang ) );

        try:
            save_overrides( args.dictionary, dictionary.overrides );
        except OSError as e:
            cli.logger.error( f"Could not save dictionary: {e}" );
            sys.exit( 1 );

        overrides = dictionary.overrides;
        cli.logger.info( f"Saved {len( overrides )} custom dictionary entries to {args.dictionary}" );

        if args.subtitle is None and args.search_bank is None:
            return;

    if args.search_bank is not None:
        entries = Dictionary( overrides ).search( args.search_bank );
        if not entries:
            cli.logger.warning( f"No dictionary entries match '{args.search_bank}'" );
        for key, value in entries:
            print( f"{key}\t{value}" );
        return;

    engine = AlignmentEngine( itn_options=ITNOptions(
        currency=not args.no_currency,
        number_words=args.number_words,
        schwa_names=not args.no_schwa
    ) );

    try:
        caption_text = read_text( args.subtitle );

        if args.script:
            result = engine.align_track( caption_text, read_text( args.script ), overrides );
            engine.display_result( result );
            output_text = result.corrected_track;
        else:
            cli.logger.info( "No script given, applying word bank corrections only" );
            output_text = engine.correct_only( caption_text, overrides );

        if args.find:
            if args.replace is not None:
                output_text, count = replace_all( output_text, args.find, args.replace, args.match_case, args.regex );
                cli.logger.info( f"Replaced {count} occurrences of '{args.find}'" );
            else:
                count = count_matches( output_text, args.find, args.match_case, args.regex );
                cli.logger.info( f"Found {count} occurrences of '{args.find}'" );

        if args.dry_run:
            print( output_text );
            return;

        output_path = cli.get_output_path();
        if output_path.exists():
            BackupManager().create_backup( output_path );

        with open( output_path, 'w', encoding='utf-8' ) as f:
            f.write( output_text );
            if not output_text.endswith( "\n" ):
                f.write( "\n" );

        cli.logger.info( f"Corrected captions saved to: {output_path}" );

    except SubAlignError as e:
        cli.logger.error( str( e ) );
        sys.exit( 1 );
    except KeyboardInterrupt:
        cli.logger.warning( "Interrupted by user" );
        sys.exit( 130 );
    except Exception as e:
        cli.logger.error( f"Unexpected error: {e}" );
        if args.debug:
            raise;
        sys.exit( 1 );


if __name__ == "__main__":
    main();
