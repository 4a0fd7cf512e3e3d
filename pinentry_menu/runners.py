"""
Runner catalog and runner resolution
"""

import shutil
import sys
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from .command import PLACEHOLDER
from .exceptions import (
    InvalidTemplateException,
    NoRunnerAvailableException,
    UnsupportedRunnerException,
)
from .logger import get_logger


@dataclass(frozen=True)
class RunnerSpec:
    """A launcher and the command template used to invoke it"""
    name: str
    template: str
    placeholders: int = 2
    
    @property
    def program(self) -> str:
        """Executable looked up on PATH"""
        return self.template.split(' ', 1)[0]


@dataclass(frozen=True)
class ResolvedRunner:
    """The runner chosen for this process"""
    name: str
    template: str


# Placeholders are filled with the prompt, then the message.
BUILTIN_RUNNERS = (
    RunnerSpec("rofi", "rofi -dmenu -input /dev/null -password -lines 0 -p %s -mesg %s"),
    # wofi has no message area, so it only takes the prompt
    RunnerSpec("wofi", "wofi --dmenu --cache-file /dev/null --password --prompt %s", placeholders=1),
    RunnerSpec("fuzzel", "fuzzel --prompt-only=%s --placeholder=%s --cache /dev/null --dmenu --password"),
)


def validate_template(name: str, template: str, placeholders: int = 2) -> None:
    """
    Check that a template can be expanded by build_argv
    
    Args:
        name: Runner name, for error messages
        template: Command template
        placeholders: Number of placeholders the template must hold
    
    Raises:
        InvalidTemplateException: If the template is malformed
    """
    if not template or template != template.strip():
        raise InvalidTemplateException(name, "empty or padded with whitespace")
    
    words = template.split(' ')
    if any(not word for word in words):
        raise InvalidTemplateException(name, "words must be separated by single spaces")
    if any(char.isspace() for char in template if char != " "):
        raise InvalidTemplateException(name, "words must not contain tabs or newlines")
    if PLACEHOLDER in words[0]:
        raise InvalidTemplateException(name, "program name cannot be a placeholder")
    
    count = template.count(PLACEHOLDER)
    if count != placeholders:
        raise InvalidTemplateException(
            name, f"expected {placeholders} '{PLACEHOLDER}' placeholders, found {count}"
        )


def build_catalog(extra: Optional[Mapping[str, str]] = None) -> Mapping[str, RunnerSpec]:
    """
    Build the read-only runner catalog
    
    Args:
        extra: User-defined runners (name -> template), overriding built-ins
    
    Returns:
        Immutable mapping of runner name to RunnerSpec, in declaration order
    """
    runners = {}
    for spec in BUILTIN_RUNNERS:
        validate_template(spec.name, spec.template, spec.placeholders)
        runners[spec.name] = spec
    
    # User runners always take both prompt and message
    for name, template in (extra or {}).items():
        validate_template(name, template)
        runners[name] = RunnerSpec(name, template)
    
    return MappingProxyType(runners)


RUNNERS = build_catalog()


def is_installed(spec: RunnerSpec) -> bool:
    """Check if the runner's executable is on PATH"""
    return shutil.which(spec.program) is not None


def resolve_runner(requested: Optional[str] = None,
                   catalog: Mapping[str, RunnerSpec] = RUNNERS) -> ResolvedRunner:
    """
    Pick the runner to use for this session
    
    An explicitly requested runner wins when it is installed. A request
    naming a runner outside the catalog is fatal. A known runner that is
    not installed falls back to the first installed catalog entry.
    
    Args:
        requested: Runner name asked for by the caller, if any
        catalog: Runner catalog
    
    Returns:
        ResolvedRunner
    
    Raises:
        UnsupportedRunnerException: If requested is not in the catalog
        NoRunnerAvailableException: If no catalog runner is installed
    """
    logger = get_logger()
    
    if requested:
        if requested not in catalog:
            raise UnsupportedRunnerException(requested)
        
        spec = catalog[requested]
        if is_installed(spec):
            logger.verbose("using requested runner %s", spec.name)
            return ResolvedRunner(spec.name, spec.template)
        
        print(f"Warning: requested runner '{requested}' not found, falling back.",
              file=sys.stderr)
        logger.warning("requested runner %s not found, falling back", requested)
    
    for spec in catalog.values():
        if is_installed(spec):
            logger.verbose("using runner %s", spec.name)
            return ResolvedRunner(spec.name, spec.template)
    
    raise NoRunnerAvailableException()
