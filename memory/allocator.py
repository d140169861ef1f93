"""Block list model of a single contiguous memory region.

The region ``[0, limit)`` is an ordered list of :class:`Block` records with
no gaps, no overlaps, no empty blocks, no two adjacent free blocks and at
most one block per process. Every operation either moves the region from
one such state to another or leaves it untouched.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from policy.fit import best_fit

logger = logging.getLogger(__name__)

FREE = None

class AllocatorError(Exception):
    pass

class InvalidArgument(AllocatorError, ValueError):
    pass

class Outcome(Enum):
    SUCCESS = 'success'
    ALREADY_EXISTS = 'already_exists'
    INSUFFICIENT_MEMORY = 'insufficient_memory'
    NOT_FOUND = 'not_found'

    def __bool__(self) -> bool:
        return self is Outcome.SUCCESS

@dataclass
class Block:
    owner: Optional[str]
    start: int
    size: int

    @property
    def end(self) -> int:
        return self.start + self.size - 1

    @property
    def is_free(self) -> bool:
        return self.owner is FREE

@dataclass(frozen=True)
class ReportEntry:
    start: int
    end: int
    owner: Optional[str]
    is_last: bool

    def __str__(self) -> str:
        end = 'END' if self.is_last else str(self.end)
        what = 'Free' if self.owner is FREE else f'Process {self.owner}'
        return f'Addresses [{self.start} : {end}] {what}'

def _check_positive(name: str, value) -> int:
    # bool is an int subclass but never a size
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgument(f'{name} must be a positive integer, got {value!r}')
    return value

def _check_process(process_id) -> str:
    if not isinstance(process_id, str) or not process_id:
        raise InvalidArgument(f'process id must be a non-empty string, got {process_id!r}')
    return process_id

class BlockList:
    def __init__(self, limit: int):
        self.limit = _check_positive('limit', limit)
        self.blocks: List[Block] = [Block(FREE, 0, limit)]
        logger.debug("initialized region of %d bytes", limit)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def find(self, process_id: str) -> Optional[Block]:
        for b in self.blocks:
            if b.owner == process_id:
                return b
        return None

    def used(self) -> int:
        return sum(b.size for b in self.blocks if not b.is_free)

    def free_bytes(self) -> int:
        return sum(b.size for b in self.blocks if b.is_free)

    def extents_free(self) -> List[Tuple[int,int]]:
        return [(b.start, b.size) for b in self.blocks if b.is_free]

    def allocate(self, process_id: str, size: int) -> Outcome:
        """Give `process_id` the smallest free block that holds `size` bytes.

        The ownership check runs over the whole region before any hole is
        taken, so a process that already owns memory is always rejected with
        ``ALREADY_EXISTS``, even when a suitable hole precedes its block.
        """
        _check_process(process_id)
        _check_positive('size', size)
        if self.find(process_id) is not None:
            logger.info("request for %s rejected: already in memory", process_id)
            return Outcome.ALREADY_EXISTS
        i = best_fit(self.blocks, size)
        if i is None:
            logger.info("request for %s (%d bytes) rejected: no hole large enough", process_id, size)
            return Outcome.INSUFFICIENT_MEMORY
        hole = self.blocks[i]
        if hole.size > size:
            rest = Block(FREE, hole.start + size, hole.size - size)
            hole.size = size
            self.blocks.insert(i + 1, rest)
            logger.debug("split hole at %d, %d bytes left free at %d", hole.start, rest.size, rest.start)
        hole.owner = process_id
        logger.debug("allocated [%d, %d] to %s", hole.start, hole.end, process_id)
        return Outcome.SUCCESS

    def release(self, process_id: str) -> Outcome:
        _check_process(process_id)
        b = self.find(process_id)
        if b is None:
            logger.info("release of %s rejected: not found", process_id)
            return Outcome.NOT_FOUND
        b.owner = FREE
        logger.debug("released [%d, %d] from %s", b.start, b.end, process_id)
        self._merge_free()
        return Outcome.SUCCESS

    def _merge_free(self) -> None:
        merged: List[Block] = []
        for b in self.blocks:
            if merged and b.is_free and merged[-1].is_free:
                merged[-1].size += b.size
                logger.debug("merged free block at %d into %d", b.start, merged[-1].start)
            else:
                merged.append(b)
        self.blocks = merged

    def compact_pass(self) -> None:
        """One left-to-right bubble pass, swapping each free block with its successor."""
        for i in range(len(self.blocks) - 1):
            cur, nxt = self.blocks[i], self.blocks[i + 1]
            if cur.is_free:
                cur.owner, nxt.owner = nxt.owner, cur.owner
                cur.size, nxt.size = nxt.size, cur.size
                nxt.start = cur.start + cur.size

    def _fragmented(self) -> bool:
        return any(b.is_free for b in self.blocks[:-1])

    def compact(self) -> int:
        """Pack owned blocks toward address 0 and leave one trailing free block.

        Passes are repeated until no free block precedes an owned one, so a
        single call always reaches the packed layout. Returns the number of
        bytes that changed address.
        """
        before: Dict[str, int] = {b.owner: b.start for b in self.blocks if not b.is_free}
        passes = 0
        while self._fragmented():
            self.compact_pass()
            self._merge_free()
            passes += 1
        moved = sum(b.size for b in self.blocks if not b.is_free and before[b.owner] != b.start)
        if passes:
            logger.debug("compaction took %d pass(es), moved %d bytes", passes, moved)
        return moved

    def report(self) -> List[ReportEntry]:
        return [ReportEntry(b.start, b.end, b.owner, b.end == self.limit - 1) for b in self.blocks]

    def invariant_violations(self) -> List[str]:
        problems = []
        if not self.blocks:
            return ['region has no blocks']
        if self.blocks[0].start != 0:
            problems.append(f'first block starts at {self.blocks[0].start}')
        if self.blocks[-1].end != self.limit - 1:
            problems.append(f'last block ends at {self.blocks[-1].end}, limit is {self.limit}')
        seen = set()
        for i, b in enumerate(self.blocks):
            if b.size <= 0:
                problems.append(f'block {i} has size {b.size}')
            if i and b.start != self.blocks[i-1].start + self.blocks[i-1].size:
                problems.append(f'block {i} starts at {b.start}, expected {self.blocks[i-1].start + self.blocks[i-1].size}')
            if i and b.is_free and self.blocks[i-1].is_free:
                problems.append(f'blocks {i-1} and {i} are both free')
            if not b.is_free:
                if b.owner in seen:
                    problems.append(f'{b.owner} owns more than one block')
                seen.add(b.owner)
        return problems

    def close(self) -> None:
        self.blocks = []
        logger.debug("region released")

def initialize(limit: int) -> BlockList:
    return BlockList(limit)

def allocate(region: BlockList, process_id: str, size: int) -> Outcome:
    return region.allocate(process_id, size)

def release(region: BlockList, process_id: str) -> Outcome:
    return region.release(process_id)

def compact(region: BlockList) -> int:
    return region.compact()

def report(region: BlockList) -> List[ReportEntry]:
    return region.report()
