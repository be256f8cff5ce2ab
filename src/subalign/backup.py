"""
Backup utility for caption files the CLI is about to overwrite.
"""
import os
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Tuple

from .logging import get_logger

TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S";
TIMESTAMP_RE = re.compile( r'^\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}$' );


class BackupManager:
    """
    Manages timestamped backup copies with size-based retention.

    Rules:
    - Files <150KB: Keep up to 50 copies
    - Files ≥150KB: Keep up to 25 copies
    - Copies are named <stem>.<ISO-8601 timestamp><suffix>
    """

    def __init__( self, backup_dir: Path = None ):
        self.logger = get_logger();
        self.backup_dir = Path( backup_dir or os.getenv( "SUBALIGN_BACKUP_DIR", "backup" ) );

        self.size_threshold = 150 * 1024;  # 150KB
        self.max_small_files = 50;         # <150KB files
        self.max_large_files = 25;         # ≥150KB files

    def get_backup_filename( self, original_file: Path, now: datetime = None ) -> str:
        """Backup filename for original_file stamped with the current second."""
        timestamp = ( now or datetime.now() ).strftime( TIMESTAMP_FORMAT );
        return f"{original_file.stem}.{timestamp}{original_file.suffix}";

    def get_existing_backups( self, original_file: Path ) -> List[Tuple[Path, datetime]]:
        """
        Existing backups of original_file, oldest first.

        Returns:
            List of (backup_path, timestamp) tuples
        """
        if not self.backup_dir.exists():
            return [];

        backups = [];
        for backup_path in self.backup_dir.glob( f"{original_file.stem}.*{original_file.suffix}" ):
            prefix, _, stamp = backup_path.stem.rpartition( "." );
            if prefix != original_file.stem or not TIMESTAMP_RE.match( stamp ):
                continue;
            try:
                backups.append( ( backup_path, datetime.strptime( stamp, TIMESTAMP_FORMAT ) ) );
            except ValueError as e:
                self.logger.debug( f"Skipping malformed backup file {backup_path}: {e}" );

        backups.sort( key=lambda item: ( item[1], item[0].name ) );
        return backups;

    def apply_retention_policy( self, original_file: Path ) -> int:
        """
        Remove the oldest backups beyond the limit for this file's size.

        Returns:
            Number of backups removed
        """
        backups = self.get_existing_backups( original_file );
        if not backups:
            return 0;

        current_size = original_file.stat().st_size if original_file.exists() else 0;
        max_backups = self.max_small_files if current_size < self.size_threshold else self.max_large_files;

        if len( backups ) <= max_backups:
            return 0;

        backups_to_remove = backups[:-max_backups];
        for backup_path, _ in backups_to_remove:
            try:
                backup_path.unlink();
                self.logger.debug( f"Removed old backup: {backup_path.name}" );
            except OSError as e:
                self.logger.warning( f"Could not remove backup {backup_path}: {e}" );

        self.logger.info( f"Removed {len( backups_to_remove )} old backup(s) to enforce retention policy" );
        return len( backups_to_remove );

    def create_backup( self, file_path: Path ) -> Path:
        """
        Copy file_path into the backup directory and apply the retention policy.

        Returns:
            Path to created backup file

        Raises:
            FileNotFoundError: file_path does not exist
        """
        file_path = Path( file_path );
        if not file_path.exists():
            raise FileNotFoundError( f"File to backup not found: {file_path}" );

        self.backup_dir.mkdir( parents=True, exist_ok=True );
        backup_path = self.backup_dir / self.get_backup_filename( file_path );

        shutil.copy2( file_path, backup_path );
        self.logger.info( f"Created backup: {backup_path}" );

        self.apply_retention_policy( file_path );
        return backup_path;
