from __future__ import annotations
import logging
from typing import List, TextIO

from control.commands import (Command, CommandError, Compact, Quit, Release, Request,
                              Status, parse_command)
from memory.allocator import BlockList, Outcome

logger = logging.getLogger(__name__)

class Dispatcher:
    """Runs parsed commands against one region and renders the replies."""
    def __init__(self, region: BlockList):
        self.region = region
        self.done = False

    def handle_line(self, line: str) -> List[str]:
        try:
            cmd = parse_command(line)
        except CommandError as e:
            logger.debug("rejected input %r: %s", line, e)
            return [str(e)]
        if cmd is None:
            return []
        return self.execute(cmd)

    def execute(self, cmd: Command) -> List[str]:
        if isinstance(cmd, Request):
            return self._request(cmd)
        if isinstance(cmd, Release):
            if self.region.release(cmd.process) is Outcome.NOT_FOUND:
                return [f'Process {cmd.process} not found.']
            return []
        if isinstance(cmd, Compact):
            self.region.compact()
            return []
        if isinstance(cmd, Status):
            out = []
            for entry in self.region.report():
                out += ['', str(entry)]
            return out + ['']
        if isinstance(cmd, Quit):
            self.done = True
            return []
        raise TypeError(f'unknown command {cmd!r}')

    def _request(self, cmd: Request) -> List[str]:
        if not cmd.approach.supported:
            return [f'{cmd.approach.label} not supported.']
        res = self.region.allocate(cmd.process, cmd.size)
        if res is Outcome.ALREADY_EXISTS:
            return [f'Process {cmd.process} already exists.']
        if res is Outcome.INSUFFICIENT_MEMORY:
            return ['Insufficient memory, request rejected.']
        return []

def run_loop(dispatcher: Dispatcher, stdin: TextIO, stdout: TextIO,
             prompt: str='allocator>', echo: bool=False) -> None:
    """Read-eval loop; stops on QUIT or end of input."""
    while not dispatcher.done:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write('\n')
            break
        if echo:
            stdout.write(line if line.endswith('\n') else line + '\n')
        for out in dispatcher.handle_line(line):
            print(out, file=stdout)
