"""
Test cases for the SubAlign logger.
"""
import pytest
from pathlib import Path
import logging
import sys

# Add src directory to path for testing
sys.path.insert( 0, str( Path( __file__ ).parent.parent / "src" ) );

from subalign.logging import SubAlignLogger, get_logger, setup_logging


class TestSubAlignLogger:
    """Test logger creation, file output and rotation."""

    def test_writes_log_file( self, tmp_path ):
        logger = SubAlignLogger( name="subalign-test-file", log_dir=str( tmp_path ) );
        logger.info( "info message" );
        logger.debug( "debug message" );

        content = ( tmp_path / "subalign-test-file.log" ).read_text( encoding="utf-8" );
        assert "INFO - info message" in content;
        # File handler records debug even when the console shows INFO only
        assert "DEBUG - debug message" in content;

    def test_console_level_follows_debug_flag( self, tmp_path ):
        quiet = SubAlignLogger( name="subalign-test-quiet", log_dir=str( tmp_path ) );
        verbose = SubAlignLogger( name="subalign-test-verbose", debug=True, log_dir=str( tmp_path ) );

        assert quiet.logger.level == logging.DEBUG;
        assert [ handler.level for handler in quiet.logger.handlers ] == [ logging.INFO, logging.DEBUG ];
        assert [ handler.level for handler in verbose.logger.handlers ] == [ logging.DEBUG, logging.DEBUG ];

    def test_log_dir_from_environment( self, tmp_path, monkeypatch ):
        monkeypatch.setenv( "SUBALIGN_LOG_DIR", str( tmp_path / "env_logs" ) );
        logger = SubAlignLogger( name="subalign-test-env" );
        assert logger.log_file == tmp_path / "env_logs" / "subalign-test-env.log";

    def test_rotates_large_log_on_startup( self, tmp_path ):
        log_file = tmp_path / "subalign-test-rotate.log";
        log_file.write_bytes( b"x" * ( 5 * 1024 * 1024 + 1 ) );

        SubAlignLogger( name="subalign-test-rotate", log_dir=str( tmp_path ) );

        rotated = [ path for path in tmp_path.glob( "subalign-test-rotate.*.log" ) ];
        assert len( rotated ) == 1;
        assert rotated[0].stat().st_size == 5 * 1024 * 1024 + 1;

    def test_setup_logging_switches_debug( self ):
        logger = setup_logging( debug=True );
        assert logger.debug_enabled;
        assert get_logger() is logger;

        logger = setup_logging( debug=False );
        assert not logger.debug_enabled;
        assert get_logger() is logger;


if __name__ == '__main__':
    pytest.main( [ __file__ ] );
