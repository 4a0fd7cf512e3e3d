"""
Decoding of the SETDESC payload
"""

import string
from typing import NamedTuple


_HEXDIGITS = frozenset(string.hexdigits)


class Description(NamedTuple):
    """Prompt label and message body taken from a SETDESC payload"""
    prompt: str
    message: str


def unescape(text: str) -> str:
    """
    Decode %XY escapes
    
    Escaped bytes are collected and decoded as UTF-8 so multi-byte characters
    survive. A '%' not followed by two hex digits is kept as-is.
    """
    result = bytearray()
    i = 0
    while i < len(text):
        char = text[i]
        if char == '%' and i + 2 < len(text):
            hex_str = text[i+1:i+3]
            if _HEXDIGITS.issuperset(hex_str):
                result.append(int(hex_str, 16))
                i += 3
                continue
        result.extend(char.encode('utf-8'))
        i += 1
    return result.decode('utf-8', errors='replace')


def _strip_quotes(line: str) -> str:
    if len(line) >= 2 and line.startswith('"') and line.endswith('"'):
        return line[1:-1]
    return line


def decode_description(raw: str) -> Description:
    """
    Split a SETDESC payload into prompt and message
    
    The decoded payload is up to two lines: a prompt label and an optional
    message, usually quoted by the agent. The message loses its quotes and
    one trailing colon; the prompt gains a trailing colon.
    
    Args:
        raw: Payload as received after the SETDESC keyword
    
    Returns:
        Description(prompt, message)
    """
    decoded = unescape(raw.replace('+', ' '))
    lines = decoded.split('\n')[:2]
    
    message = ''
    if len(lines) > 1:
        message = _strip_quotes(lines[1])
        if message.endswith(':'):
            message = message[:-1]
    
    return Description(prompt=f"{lines[0]}:", message=message)
