"""
Exceptions raised by pinentry-menu
"""

from typing import Optional


class PinentryMenuException(Exception):
    """Base exception for pinentry-menu"""
    pass


class ConfigurationException(PinentryMenuException):
    """Fatal problem detected before the protocol loop starts"""
    pass


class DisplayNotSetException(ConfigurationException):
    """Neither DISPLAY nor WAYLAND_DISPLAY is available"""
    
    def __init__(self):
        super().__init__("DISPLAY or WAYLAND_DISPLAY must be set.")


class UnsupportedRunnerException(ConfigurationException):
    """Requested runner is not in the catalog"""
    
    def __init__(self, runner: str):
        self.runner = runner
        super().__init__(f"requested runner '{runner}' not supported, exiting.")


class NoRunnerAvailableException(ConfigurationException):
    """None of the catalog runners is installed"""
    
    def __init__(self):
        super().__init__("no supported runners found")


class InvalidTemplateException(ConfigurationException):
    """Runner command template is malformed"""
    
    def __init__(self, name: str, reason: str):
        self.name = name
        super().__init__(f"invalid template for runner '{name}': {reason}")


class LauncherSpawnFailedException(PinentryMenuException):
    """Launcher process could not be started"""
    
    def __init__(self, program: str, cause: Optional[BaseException] = None):
        self.program = program
        self.cause = cause
        message = f"failed to start '{program}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
