"""
Fixity check results.

A fixity result records the checksum and size computed for one stored copy
of a binary. Its status is derived by comparing those against the expected
digest and size.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Set


class FixityState(Enum):
    """Outcome of a fixity check."""
    SUCCESS = "SUCCESS"
    BAD_CHECKSUM = "BAD_CHECKSUM"
    BAD_SIZE = "BAD_SIZE"


@dataclass(frozen=True)
class FixityResult:
    """
    Outcome of verifying one stored binary.
    
    Attributes:
        computed_checksum: Digest URI computed from the stored bytes (e.g. 'urn:sha1:abc').
        computed_size: Number of bytes read.
        store_identifier: Optional identifier of the storage location checked.
    """
    computed_checksum: str
    computed_size: int
    store_identifier: Optional[str] = None
    
    def status(self, expected_size: int, expected_digest: str) -> Set[FixityState]:
        """
        Compare this result against the expected size and digest.
        
        Returns:
            {SUCCESS} when both match, otherwise the set of failures.
        """
        states: Set[FixityState] = set()
        if self.computed_checksum != str(expected_digest):
            states.add(FixityState.BAD_CHECKSUM)
        if self.computed_size != expected_size:
            states.add(FixityState.BAD_SIZE)
        if not states:
            states.add(FixityState.SUCCESS)
        return states
    