"""Tokenizer for the allocator's command language.

    RQ <process> <size> <approach>   request memory (approach B, F or W)
    RL <process>                     release a process' memory
    C                                compact
    STAT                             status report
    QUIT                             leave

Commands are case-sensitive and process names are ``P`` followed by
digits. Malformed input raises :class:`CommandError` whose message is the
diagnostic shown to the user; nothing malformed reaches the region.
"""
from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Optional, Union

from memory.allocator import AllocatorError
from policy.fit import Approach

PROCESS_NAME = re.compile(r'P[0-9]+')
NUMBER = re.compile(r'[+-]?[0-9]+')

RQ_USAGE = 'Usage: RQ <process> <size> <approach>'
RL_USAGE = 'Usage: RL <process>'

class CommandError(AllocatorError):
    pass

@dataclass(frozen=True)
class Request:
    process: str
    size: int
    approach: Approach

@dataclass(frozen=True)
class Release:
    process: str

@dataclass(frozen=True)
class Compact:
    pass

@dataclass(frozen=True)
class Status:
    pass

@dataclass(frozen=True)
class Quit:
    pass

Command = Union[Request, Release, Compact, Status, Quit]

SIMPLE = {'C': Compact, 'STAT': Status, 'QUIT': Quit}

def _process(name: str) -> str:
    if not PROCESS_NAME.fullmatch(name):
        raise CommandError(f'Invalid process name: {name}')
    return name

def parse_size(text: str) -> int:
    if not NUMBER.fullmatch(text):
        raise CommandError(f'Invalid memory size: {text}')
    return int(text)

def _request(args) -> Request:
    if not args or len(args) > 3:
        raise CommandError(RQ_USAGE)
    name = _process(args[0])
    if len(args) == 1:
        raise CommandError(RQ_USAGE)
    if len(args) == 2:
        raise CommandError('No approach specified. (B/F/W)')
    size = parse_size(args[1])
    if size <= 0:
        raise CommandError('Zero memory requested.')
    approach = Approach.from_code(args[2])
    if approach is None:
        raise CommandError('Invalid approach specified.')
    return Request(name, size, approach)

def parse_command(line: str) -> Optional[Command]:
    """Turn one input line into a command, or None for a blank line."""
    tokens = line.split()
    if not tokens:
        return None
    head, args = tokens[0], tokens[1:]
    if head == 'RQ':
        return _request(args)
    if head == 'RL':
        if len(args) != 1:
            raise CommandError(RL_USAGE)
        return Release(_process(args[0]))
    if head in SIMPLE and not args:
        return SIMPLE[head]()
    raise CommandError('Invalid command or case.')
