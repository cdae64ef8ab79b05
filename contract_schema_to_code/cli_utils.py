"""
CLI utilities: rebuild the invoking command line for the generation comment.
"""

from pathlib import Path

import click

COMMAND_NAME = "contract_schema_to_code"


def _format_value(param: click.Parameter, value) -> str:
    """Render a parameter value; file system paths are shown by file name only."""
    if isinstance(param.type, click.Path):
        return Path(str(value)).name
    return str(value)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the command line of the running Click command.

    Flags and options left at their default are omitted, so the result only
    shows what was chosen explicitly.

    Args:
        click_command: Click command whose parameters are inspected

    Returns:
        "contract_schema_to_code <arguments> <options>", or just the command
        name outside of a Click invocation
    """
    context = click.get_current_context(silent=True)
    if context is None or not context.params:
        return COMMAND_NAME

    arguments: list[str] = []
    options: list[str] = []

    for param in click_command.params:
        value = context.params.get(param.name)
        if not value or isinstance(value, bool):
            continue

        if isinstance(param, click.Argument):
            arguments.append(_format_value(param, value))
        elif isinstance(param, click.Option) and value != param.default:
            options.extend([param.opts[0], _format_value(param, value)])

    return " ".join([COMMAND_NAME, *arguments, *options])
