"""
Common CLI utilities and decorators for consistent command behavior.
"""

import json
import sys
import click
from functools import wraps
from typing import Any, Generator
from .progress import get_progress
from .exit_codes import (
    SUCCESS, INTERRUPTED,
    get_exit_code_for_exception, CommandError
)

# Attributes of CommandError subclasses copied into the JSON error object
ERROR_CONTEXT_FIELDS = ('package', 'filename', 'path')


def _to_jsonable(item: Any) -> Any:
    if hasattr(item, 'to_dict'):
        return item.to_dict()
    return item


def emit(item: Any) -> None:
    """Print one record as a JSONL line on stdout."""
    print(json.dumps(_to_jsonable(item), ensure_ascii=False), flush=True)


def standard_command(streaming: bool = False):
    """
    Decorator that provides standard CLI behavior:
    - Progress reporting on stderr
    - Clean JSONL output on stdout
    - Automatic --quiet/-q handling to suppress data output
    - Consistent error handling and exit codes

    Args:
        streaming: If True, output JSONL as items are produced.
                  If False, collect results and output at end.
    """
    def decorator(func):

        @wraps(func)
        def wrapper(*args, **kwargs):
            verbose = kwargs.get('verbose', False)
            quiet = kwargs.get('quiet', False)

            progress = get_progress(enabled=verbose or None)
            kwargs['progress'] = progress

            try:
                result = func(*args, **kwargs)

                if isinstance(result, Generator):
                    if streaming:
                        for item in result:
                            if not quiet:
                                emit(item)
                    else:
                        items = list(result)
                        if not quiet:
                            for item in items:
                                emit(item)
                elif isinstance(result, (list, tuple)):
                    if not quiet:
                        for item in result:
                            emit(item)
                elif result is not None and not quiet:
                    emit(result)

                sys.exit(SUCCESS)

            except KeyboardInterrupt:
                progress.error("Interrupted by user")
                sys.exit(INTERRUPTED)
            except click.ClickException:
                # Click exceptions already have their exit code
                raise
            except CommandError as e:
                progress.error(str(e))
                if not quiet:
                    error_obj = {
                        "error": str(e),
                        "type": type(e).__name__,
                        "exit_code": e.exit_code
                    }
                    for name in ERROR_CONTEXT_FIELDS:
                        value = getattr(e, name, None)
                        if value:
                            error_obj[name] = str(value)
                    emit(error_obj)
                sys.exit(e.exit_code)
            except Exception as e:
                progress.error(f"Command failed: {e}")
                if not quiet:
                    emit({
                        "error": str(e),
                        "type": type(e).__name__
                    })
                sys.exit(get_exit_code_for_exception(e))

        return wrapper
    return decorator


# Standard options that many commands share
common_options = {
    'verbose': click.option('-v', '--verbose', is_flag=True,
                           help='Force progress output even when piped'),
    'quiet': click.option('-q', '--quiet', is_flag=True,
                         help='Suppress data output, show only progress'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('verbose', 'quiet')
        def my_command(verbose, quiet):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
