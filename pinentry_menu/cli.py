"""
Command-line entry point for pinentry-menu
"""

import os
import sys
import argparse
from typing import Optional, List, TextIO

from . import __version__
from .config import Config
from .exceptions import ConfigurationException, DisplayNotSetException
from .logger import LogLevel, get_logger
from .runners import build_catalog, resolve_runner
from .session import PinentrySession


DISPLAY_VARIABLES = ('DISPLAY', 'WAYLAND_DISPLAY')


def check_environment() -> None:
    """
    Ensure a graphical display is available
    
    Raises:
        DisplayNotSetException: If neither display variable is set
    """
    if not any(name in os.environ for name in DISPLAY_VARIABLES):
        raise DisplayNotSetException()


class CLI:
    """Command-line interface handler"""
    
    def __init__(self, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None,
                 config: Optional[Config] = None):
        self.stdin = stdin
        self.stdout = stdout
        self.config = config or Config()
        self.logger = get_logger()
    
    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            prog='pinentry-menu',
            description='pinentry front-end that prompts through rofi, wofi or fuzzel',
        )
        
        parser.add_argument('--version', action='version',
                          version=f'pinentry-menu {__version__}')
        parser.add_argument('runner', nargs='?',
                          help='Runner to use (default: $PINENTRY_USER_DATA, then config)')
        parser.add_argument('--debug', '-d', action='store_true',
                          help='Write a debug log')
        parser.add_argument('--display', '-D', metavar='DISPLAY',
                          help='X display passed on to the runner')
        
        # Standard pinentry options; accepted for compatibility and ignored
        for long_opt, short_opt in (
            ('--ttyname', '-T'),
            ('--ttytype', '-N'),
            ('--lc-ctype', '-C'),
            ('--lc-messages', '-M'),
            ('--timeout', '-o'),
            ('--parent-wid', '-W'),
            ('--colors', '-c'),
            ('--ttyalert', '-a'),
        ):
            parser.add_argument(long_opt, short_opt, help=argparse.SUPPRESS)
        parser.add_argument('--no-global-grab', '-g', action='store_true',
                          help=argparse.SUPPRESS)
        
        return parser
    
    def _requested_runner(self, parsed_args) -> Optional[str]:
        """Runner from argument, environment, then config file"""
        if parsed_args.runner:
            return parsed_args.runner
        
        user_data = os.environ.get('PINENTRY_USER_DATA')
        if user_data:
            return user_data
        
        return self.config.get_runner()
    
    def run(self, args: Optional[List[str]] = None) -> int:
        """Run CLI with arguments"""
        parser = self._create_parser()
        
        if args is None:
            args = sys.argv[1:]
        
        parsed_args, unknown = parser.parse_known_args(args)
        
        if parsed_args.debug:
            self.logger.set_log_level(LogLevel.DEBUG)
        if unknown:
            self.logger.debug("ignoring unknown arguments: %s", ' '.join(unknown))
        if parsed_args.display:
            os.environ['DISPLAY'] = parsed_args.display
        
        try:
            check_environment()
            catalog = build_catalog(self.config.get_runners())
            runner = resolve_runner(self._requested_runner(parsed_args), catalog)
            self.logger.info("serving pinentry requests with %s", runner.name)
            
            session = PinentrySession(runner, stdin=self.stdin, stdout=self.stdout)
            return session.run()
        except ConfigurationException as e:
            self.logger.verbose("fatal: %s", e)
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except BrokenPipeError:
            self.logger.verbose("peer went away")
            return 0
        except KeyboardInterrupt:
            print("\nAborted", file=sys.stderr)
            return 130
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            return 1


def main():
    """Main entry point"""
    from .process_security import ProcessSecurity
    ProcessSecurity.set_process_name('pinentry-menu')
    ProcessSecurity.disable_core_dumps()
    
    cli = CLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
