"""
Launcher command construction and invocation
"""

import subprocess
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import LauncherSpawnFailedException
from .logger import get_logger


PLACEHOLDER = "%s"


@dataclass(frozen=True)
class PromptResult:
    """Outcome of one launcher invocation"""
    secret: Optional[str]
    accepted: bool


def build_argv(template: str, prompt: str, message: str) -> List[str]:
    """
    Expand a runner template into an argument vector
    
    The template is split on single spaces into literal words. Placeholders
    are then filled, in order, with ``prompt`` and ``message``. Substituted
    text is inserted verbatim into its word: it is never split again and never
    scanned for further placeholders, so spaces or ``%s`` inside user text
    cannot create extra arguments.
    
    Args:
        template: Runner command template
        prompt: Text for the first placeholder
        message: Text for the second placeholder
    
    Returns:
        Argument vector with one element per template word
    """
    values = iter((prompt, message))
    argv = []
    
    for word in template.split(' '):
        pieces = word.split(PLACEHOLDER)
        expanded = [pieces[0]]
        for piece in pieces[1:]:
            expanded.append(next(values, ''))
            expanded.append(piece)
        argv.append(''.join(expanded))
    
    return argv


def _decode(output: Optional[bytes]) -> str:
    """Decode launcher output as UTF-8, replacing invalid bytes"""
    return (output or b'').decode('utf-8', errors='replace')


def _strip_line_terminator(text: str) -> str:
    """Remove a single trailing line terminator"""
    if text.endswith('\r\n'):
        return text[:-2]
    if text.endswith('\n'):
        return text[:-1]
    return text


def run_prompt(template: str, prompt: str, message: str) -> PromptResult:
    """
    Run the launcher and collect what the user typed
    
    The child gets an empty stdin. A non-zero exit status means the user
    cancelled; whatever was printed is discarded in that case.
    
    Args:
        template: Runner command template
        prompt: Prompt label
        message: Longer description shown by the launcher
    
    Returns:
        PromptResult with the secret, or None when nothing was entered
    
    Raises:
        LauncherSpawnFailedException: If the launcher could not be started
    """
    logger = get_logger()
    argv = build_argv(template, prompt, message)
    logger.debug("running launcher %s", argv[0])
    
    try:
        result = subprocess.run(
            argv,
            stdin=subprocess.DEVNULL,
            capture_output=True
        )
    except OSError as e:
        raise LauncherSpawnFailedException(argv[0], e) from e
    
    stderr = _decode(result.stderr)
    if stderr:
        logger.debug("%s stderr: %s", argv[0], stderr.rstrip())
    
    if result.returncode != 0:
        logger.verbose("%s exited with status %d, treating as cancel",
                       argv[0], result.returncode)
        return PromptResult(secret=None, accepted=False)
    
    secret = _strip_line_terminator(_decode(result.stdout))
    return PromptResult(secret=secret or None, accepted=True)
