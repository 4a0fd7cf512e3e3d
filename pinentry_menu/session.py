"""
Pinentry protocol session over stdin/stdout
"""

import os
import sys
from dataclasses import dataclass
from typing import Callable, Dict, Optional, TextIO

from .command import run_prompt
from .description import decode_description
from .exceptions import LauncherSpawnFailedException
from .logger import get_logger
from .runners import ResolvedRunner


PROTOCOL_VERSION = "0.1"
GREETING = "Pleased to meet you"
ERROR_OPEN = "_ERO_"
ERROR_CLOSE = "_ERC"


@dataclass
class SessionState:
    """Fields set by the agent during one session"""
    prompt: str = ""
    message: str = ""
    error: Optional[str] = None


class PinentrySession:
    """
    Line-oriented pinentry state machine
    
    One command is read per line and answered before the next line is read.
    Every command is accepted in any state; unknown ones get a plain OK.
    """
    
    def __init__(self, runner: ResolvedRunner,
                 stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None):
        self.runner = runner
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.state = SessionState()
        self.closed = False
        self.logger = get_logger()
        
        self._handlers: Dict[str, Callable[[str], None]] = {
            'GETINFO': self.cmd_getinfo,
            'SETDESC': self.cmd_setdesc,
            'SETERROR': self.cmd_seterror,
            'SETPROMPT': self.cmd_setprompt,
            'GETPIN': self.cmd_getpin,
            'BYE': self.cmd_bye,
        }
    
    @staticmethod
    def _escape(text: str) -> str:
        """Escape text for a protocol data line"""
        result = []
        for char in text:
            if char == '%':
                result.append('%25')
            elif char == '\n':
                result.append('%0A')
            elif char == '\r':
                result.append('%0D')
            else:
                result.append(char)
        return ''.join(result)
    
    def _write(self, line: str) -> None:
        self.stdout.write(line + "\n")
        self.stdout.flush()
    
    def send_ok(self, text: Optional[str] = None) -> None:
        """Send OK, optionally with trailing text"""
        self._write(f"OK {text}" if text else "OK")
    
    def send_data(self, data: str) -> None:
        """Send a D line"""
        self._write(f"D {self._escape(data)}")
    
    @staticmethod
    def parse_line(line: str):
        """
        Split an input line into command and arguments
        
        Returns:
            (command, arguments) tuple; command is '' for blank lines
        """
        parts = line.strip().split(None, 1)
        if not parts:
            return '', ''
        if len(parts) == 1:
            return parts[0], ''
        return parts[0], parts[1]
    
    def handle_line(self, line: str) -> None:
        """Dispatch a single protocol line"""
        command, rest = self.parse_line(line)
        
        self.logger.debug("[RECV] %s %s", command, rest)
        
        if command.startswith('#'):
            self.send_ok()
            return
        
        handler = self._handlers.get(command)
        if handler is None:
            self.send_ok()
            return
        
        handler(rest)
    
    def run(self) -> int:
        """
        Serve commands until BYE or end of input
        
        Returns:
            Exit status for the process
        """
        self.send_ok(GREETING)
        
        while not self.closed:
            line = self.stdin.readline()
            if not line:
                self.logger.verbose("peer closed input")
                break
            self.handle_line(line)
        
        return 0
    
    def cmd_getinfo(self, rest: str) -> None:
        """Handle GETINFO"""
        if rest == 'flavor':
            value = self.runner.name
        elif rest == 'version':
            value = PROTOCOL_VERSION
        elif rest == 'ttyinfo':
            value = "- - -"
        elif rest == 'pid':
            value = str(os.getpid())
        else:
            # Unknown sub-commands get no reply at all
            self.logger.verbose("ignoring GETINFO %s", rest)
            return
        
        self.send_data(value)
        self.send_ok()
    
    def cmd_setdesc(self, rest: str) -> None:
        """Handle SETDESC"""
        description = decode_description(rest)
        self.state.prompt = description.prompt
        self.state.message = description.message
        self.send_ok()
    
    def cmd_seterror(self, rest: str) -> None:
        """Handle SETERROR"""
        self.state.error = f"{ERROR_OPEN}{rest.upper()}{ERROR_CLOSE}"
        self.send_ok()
    
    def cmd_setprompt(self, rest: str) -> None:
        """Handle SETPROMPT"""
        self.state.prompt = rest.replace(':', '')
        self.send_ok()
    
    def cmd_getpin(self, rest: str) -> None:
        """Handle GETPIN"""
        message = f"{self.state.error or ''}{self.state.message}"
        
        try:
            result = run_prompt(self.runner.template, self.state.prompt, message)
        except LauncherSpawnFailedException as e:
            self.logger.error("%s", e)
        else:
            if result.accepted and result.secret:
                self.send_data(result.secret)
        
        self.send_ok()
    
    def cmd_bye(self, rest: str) -> None:
        """Handle BYE"""
        self.send_ok("closing connection")
        self.closed = True
