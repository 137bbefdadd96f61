# envforge:header:start
#
#   project      : EnvForge
#   file         : composer.py
#   file_relpath : src/envforge/runtime/composer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Two-level scope composition for one (application, environment) pair.

The environment script and the application overlay run in two independent
scopes. The only link between them is the environment's binding table, bound
as ``env`` in the application scope:

    1. load the environment script in a fresh scope;
    2. set ``name`` on its table to the environment name (after the script ran,
       overwriting any ``name`` the script defined);
    3. create the application scope (standard library + ``vars``);
    4. bind the environment table as ``env``;
    5. run the application overlay and return the application bindings.

Environment side effects therefore never leak into the overlay's own top-level
bindings, and the overlay cannot shadow environment internals beyond ``env``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from envforge.config.logging import get_logger
from envforge.constants import ENV_BINDING_NAME, ENV_NAME_FIELD

if TYPE_CHECKING:
    from envforge.config.logging import EnvforgeLogger
    from envforge.layout import Composition
    from envforge.runtime.lua import LuaTable
    from envforge.runtime.scope import Scope, ScopeLoader

logger: EnvforgeLogger = get_logger(__name__)


class ScopeComposer:
    """Build the evaluated application scope for a composition.

    Attributes:
        loader (ScopeLoader): Loader providing fresh scopes and script execution.
    """

    def __init__(self, loader: ScopeLoader) -> None:
        self.loader: ScopeLoader = loader

    def compose(self, composition: Composition) -> LuaTable:
        """Evaluate the environment and application scripts of ``composition``.

        Args:
            composition (Composition): The pair to evaluate; both script paths must exist.

        Returns:
            LuaTable: The application scope's binding table, ready for conversion.
        """
        logger.info("Composing %s", composition.label)

        env_table: LuaTable = self.loader.load(composition.env_script)
        env_table[ENV_NAME_FIELD] = composition.env_name

        app_scope: Scope = self.loader.new_scope(composition.label)
        app_scope.bind(ENV_BINDING_NAME, env_table)

        return self.loader.run(app_scope, composition.app_script)
