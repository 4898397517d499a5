"""Top‑level package for xsh.

xsh bootstraps a shell session from a tree of configuration
fragments.  Each fragment belongs to a *module* (one directory under
``~/.shell``) and to a *runcom*, the phase of shell start-up it is
meant for (``lib``, ``env``, ``interactive``, ``login``, ``comp``).
Invoked once per session, typically as::

    eval "$(xsh gen)"

it walks the modules in a fixed order, picks the best file for each
runcom and prints the shell code that sources them.  ``xsh files``
prints the same selection as a tab separated listing instead.

Modules may use one of two layouts:

* **Simple** – runcom files live directly in the module directory.
* **Embedded** – runcom files live in a ``.shell`` subdirectory, so a
  project can ship its own shell integration next to its code.

The public API surface consists of the following key classes and
functions:

* :class:`xsh.config_service.ConfigService` – resolves the
  configuration directory and merges ``config.json`` with the
  environment into an :class:`xsh.config_service.AppConfig`.
* :func:`xsh.resolver.resolve` – picks the file for one module and
  runcom.
* :class:`xsh.walker.ModuleWalker` – yields
  :class:`xsh.walker.ResolvedEntry` values over all modules.
* :class:`xsh.dispatcher.ShellDispatcher` – maps shell operations to
  their handlers.
* :mod:`xsh.cli` – the ``xsh`` command.
"""

__version__ = "0.0.1"
__status__ = "alpha"
__date__ = "2023-01-01"
__author__ = "author"
__email__ = "email@address.org"
__license__ = "GPLv3"

from .config_service import AppConfig, ConfigService  # noqa: F401,E402
from .dispatcher import ShellDispatcher  # noqa: F401,E402
from .walker import ModuleLayout, ModuleWalker, ResolvedEntry  # noqa: F401,E402
