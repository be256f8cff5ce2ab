"""
Word-level diff between a caption word stream and a script word stream.

Built on the Indel (insertion/deletion only) edit script from rapidfuzz, so
unchanged segments are exactly a longest common subsequence of the two
streams.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from rapidfuzz.distance import Indel


class DiffKind( Enum ):
    UNCHANGED = "unchanged";
    ONLY_IN_SOURCE = "only_in_source";    # caption word missing from the script
    ONLY_IN_TARGET = "only_in_target";    # script word missing from the caption


@dataclass
class DiffSegment:
    """A run of words sharing one diff kind."""

    kind: DiffKind;
    words: List[str] = field( default_factory=list );


def diff_words( source: Sequence[str], target: Sequence[str] ) -> List[DiffSegment]:
    """
    Compute a minimal word diff of source against target.

    Within a changed region the ONLY_IN_SOURCE segment always precedes the
    ONLY_IN_TARGET segment. Adjacent segments never share a kind.

    Args:
        source: Caption word stream
        target: Script word stream

    Returns:
        Ordered DiffSegments; UNCHANGED + ONLY_IN_SOURCE words rebuild source,
        UNCHANGED + ONLY_IN_TARGET words rebuild target
    """
    source = list( source );
    target = list( target );

    if not source and not target:
        return [];
    if not source:
        return [ DiffSegment( DiffKind.ONLY_IN_TARGET, target ) ];
    if not target:
        return [ DiffSegment( DiffKind.ONLY_IN_SOURCE, source ) ];

    segments: List[DiffSegment] = [];
    removed: List[str] = [];
    added: List[str] = [];

    def flush_changes():
        if removed:
            segments.append( DiffSegment( DiffKind.ONLY_IN_SOURCE, list( removed ) ) );
            removed.clear();
        if added:
            segments.append( DiffSegment( DiffKind.ONLY_IN_TARGET, list( added ) ) );
            added.clear();

    for op in Indel.opcodes( source, target ):
        if op.tag == "equal":
            flush_changes();
            words = source[op.src_start:op.src_end];
            if not words:
                continue;
            if segments and segments[-1].kind == DiffKind.UNCHANGED:
                segments[-1].words.extend( words );
            else:
                segments.append( DiffSegment( DiffKind.UNCHANGED, words ) );
        else:
            # "replace" does not occur in an Indel script but is handled the same way
            removed.extend( source[op.src_start:op.src_end] );
            added.extend( target[op.dest_start:op.dest_end] );

    flush_changes();
    return segments;
