"""Hook CLI commands."""

import click

from contactdb.hooks import HOOK_NAMES, HookRegistry, register_builtin_hooks


@click.group()
def hooks():
    """Hook commands."""
    pass


@hooks.command("list")
def list_cmd():
    """List hook functions that configuration can refer to by name."""
    register_builtin_hooks()

    names = HookRegistry.list_registered()
    click.echo(f"Hook lists: {', '.join(HOOK_NAMES)}")
    click.echo(f"\n{len(names)} registered hook function(s):")
    for name in names:
        fn = HookRegistry.get(name)
        doc = (fn.__doc__ or "").strip().splitlines()
        summary = f": {doc[0]}" if doc else ""
        click.echo(f"  {name}{summary}")
