"""Named hook functions for configuration files.

The ``hidden_update.functions`` list in a contactdb YAML file refers to
callbacks either by a name registered here or by a ``module:attribute``
path. Registering a name is what lets a config entry such as
``recordLastSeen`` stand for a Python function.
"""

import importlib
from collections.abc import Callable

from contactdb.hooks.types import HookFn


class HookRegistry:
    """Process-wide table of hook names usable from configuration.

    Names only matter when configuration is resolved (see
    HiddenUpdateConfig.resolve_functions and ``contactdb config validate``);
    hook lists themselves hold the function objects.

    Example:
        @hook("tagSource")
        def tag_source(ctx: HookContext) -> None:
            ...
    """

    _hooks: dict[str, HookFn] = {}

    @classmethod
    def register(cls, name: str, hook_fn: HookFn) -> None:
        """Make ``hook_fn`` available to configuration as ``name``.

        The first registration of a name wins; later ones are ignored, so
        register_builtin_hooks() can run on every CLI invocation.
        """
        if name in cls._hooks:
            return
        cls._hooks[name] = hook_fn

    @classmethod
    def get(cls, name: str) -> HookFn:
        """Look up a configuration name.

        Raises:
            ValueError: If nothing is registered under ``name``
        """
        if name not in cls._hooks:
            raise ValueError(
                f"Hook '{name}' is not registered. "
                "Hooks must be registered before they are referenced by name."
            )
        return cls._hooks[name]

    @classmethod
    def resolve(cls, ref: str) -> HookFn:
        """Resolve one configuration entry.

        Entries containing ``:`` are imported as ``module:attribute`` (the
        attribute may be dotted); anything else is a registered name.

        Raises:
            ValueError: If the name is unknown or the path cannot be imported
        """
        if ":" not in ref:
            return cls.get(ref)

        module_name, _, attr = ref.partition(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ValueError(f"Cannot import hook module '{module_name}': {e}") from e

        target = module
        for part in attr.split("."):
            try:
                target = getattr(target, part)
            except AttributeError:
                raise ValueError(
                    f"Module '{module_name}' has no attribute '{attr}'"
                ) from None

        if not callable(target):
            raise ValueError(f"Hook '{ref}' is not callable")
        return target

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._hooks

    @classmethod
    def list_registered(cls) -> list[str]:
        """Names shown by ``contactdb hooks list``, sorted."""
        return sorted(cls._hooks.keys())

    @classmethod
    def clear(cls) -> None:
        """Forget every name. Used by tests."""
        cls._hooks.clear()


def hook(name: str) -> Callable[[HookFn], HookFn]:
    """Decorator form of HookRegistry.register.

    Usage:
        @hook("tagSource")
        def tag_source(ctx: HookContext) -> None:
            ctx.set_field_quietly("source", "mail")

    after which a config file can list ``tagSource`` under
    ``hidden_update.functions``.
    """

    def decorator(fn: HookFn) -> HookFn:
        HookRegistry.register(name, fn)
        return fn

    return decorator
