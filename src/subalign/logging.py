"""
Logging system for SubAlign with 5MB truncation check and Rich integration.
"""
import os
import logging
import shutil
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler


class SubAlignLogger:
    """
    Custom logger for SubAlign with automatic log rotation and Rich display.

    Features:
    - 5MB size check on startup, rotates if exceeded
    - Rich console output (stderr, so aligned output can be piped)
    - File logging with rotation under SUBALIGN_LOG_DIR (default: logs/)
    - INFO default, DEBUG with --debug flag
    """

    def __init__( self, name: str = "subalign", debug: bool = False, log_dir: str = None ):
        self.name = name;
        self.debug_enabled = debug;
        self.console = Console( stderr=True );

        self.logs_dir = Path( log_dir or os.getenv( "SUBALIGN_LOG_DIR", "logs" ) );
        self.logs_dir.mkdir( parents=True, exist_ok=True );

        self.log_file = self.logs_dir / f"{name}.log";

        # Check and rotate if log file >5MB on startup
        self._check_and_rotate_on_startup();

        self.logger = self._setup_logger();

    def _check_and_rotate_on_startup( self ):
        """Check log file size on startup and rotate if >5MB."""
        if self.log_file.exists():
            file_size = self.log_file.stat().st_size;
            if file_size > 5 * 1024 * 1024:  # 5MB
                timestamp = datetime.now().isoformat().replace( ":", "-" );
                backup_name = self.logs_dir / f"{self.name}.{timestamp}.log";

                shutil.move( str( self.log_file ), str( backup_name ) );
                self.console.print( f"Rotated log file to {backup_name}" );

    def _setup_logger( self ):
        """Setup logger with Rich console and file handlers."""
        logger = logging.getLogger( self.name );
        # Handlers filter by level; the file keeps DEBUG records regardless of --debug
        logger.setLevel( logging.DEBUG );
        logger.propagate = False;

        # Clear existing handlers
        for handler in list( logger.handlers ):
            handler.close();
        logger.handlers.clear();

        console_handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=self.debug_enabled
        );
        console_handler.setLevel( logging.DEBUG if self.debug_enabled else logging.INFO );
        console_handler.setFormatter( logging.Formatter( "%(message)s" ) );
        logger.addHandler( console_handler );

        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=5 * 1024 * 1024,  # 5MB
            backupCount=5,
            encoding="utf-8"
        );
        file_handler.setLevel( logging.DEBUG );
        file_handler.setFormatter( logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        ) );
        logger.addHandler( file_handler );

        return logger;

    def debug( self, message, **kwargs ):
        """Log debug message."""
        self.logger.debug( message, **kwargs );

    def info( self, message, **kwargs ):
        """Log info message."""
        self.logger.info( message, **kwargs );

    def warning( self, message, **kwargs ):
        """Log warning message."""
        self.logger.warning( message, **kwargs );

    def error( self, message, **kwargs ):
        """Log error message."""
        self.logger.error( message, **kwargs );

    def critical( self, message, **kwargs ):
        """Log critical message."""
        self.logger.critical( message, **kwargs );


# Global logger instance
_logger = None;


def get_logger( debug: bool = False ) -> SubAlignLogger:
    """Get the global SubAlign logger instance."""
    global _logger;
    if _logger is None:
        _logger = SubAlignLogger( debug=debug );
    return _logger;


def setup_logging( debug: bool = False ) -> SubAlignLogger:
    """
    Setup logging for the application.

    Replaces the global logger so that a --debug flag parsed after a component
    already created the default logger still takes effect.
    """
    global _logger;
    if _logger is None or _logger.debug_enabled != debug:
        _logger = SubAlignLogger( debug=debug );
    return _logger;
