"""Script bundle evaluated inside the WhatsApp Web page.

Each ``*.js`` file holds a single function expression suitable for
``page.evaluate``:

- ``expose_store``: locates the webpack modules of the web app and
  publishes them as ``window.Store``.
- ``utils``: installs ``window.WWebJS`` helpers (serializers, chat and
  contact lookups, send helpers).
- ``listeners``: forwards store change notifications to the host
  functions exposed by the event bridge.
- ``send_message``: the single-evaluation send routine.
"""

from functools import lru_cache
from importlib import resources

EXPOSE_STORE = "expose_store"
LOAD_UTILS = "utils"
LISTENERS = "listeners"
SEND_MESSAGE = "send_message"


@lru_cache(maxsize=None)
def load_script(name: str) -> str:
    """Read a bundled script by name (without the ``.js`` suffix)."""
    return resources.files(__name__).joinpath(f"{name}.js").read_text(encoding="utf-8")


__all__ = ["EXPOSE_STORE", "LOAD_UTILS", "LISTENERS", "SEND_MESSAGE", "load_script"]
