"""Factory engine: registry, clone, overlay, dispatch, assignment, executors.

Modules
-------
records       Record introspection (fields, types, writes)
registry      FactoryRegistry + process-wide init/reset lifecycle
clone         Memberwise prototype copies
overlay       Attrs applied to clones by field name
capabilities  Closed set of persistence capabilities
dispatcher    Capability resolution and save invocation
assign        Result copy into output targets (Ref or record)
assembly      create(...).with_attrs(...).exec(store)
executor      AutoExecutor (first-error short-circuit)
"""

from .assembly import Assembly, create
from .assign import Ref, assign
from .capabilities import CAPABILITIES, SQL_SAVABLE, Capability, resolve_capability
from .clone import clone
from .dispatcher import dispatch
from .executor import AutoExecutor
from .overlay import Attrs, overlay
from .registry import (
    FactoryRegistry,
    define,
    get_registry,
    init_registry,
    lookup,
    reset_registry,
)

__all__ = [
    "Assembly",
    "Attrs",
    "AutoExecutor",
    "CAPABILITIES",
    "Capability",
    "FactoryRegistry",
    "Ref",
    "SQL_SAVABLE",
    "assign",
    "clone",
    "create",
    "define",
    "dispatch",
    "get_registry",
    "init_registry",
    "lookup",
    "overlay",
    "reset_registry",
    "resolve_capability",
]
