"""Timeline host bindings.

WHY: The engine drives a timeline through a narrow interface; each host
module binds that interface to a concrete backend.

HOW: base.py defines the abstract interface, resolve.py binds it to a
live DaVinci Resolve session, snapshot.py to a JSON timeline snapshot.

RULES:
- Host modules may import the core models, never the controller
- resolve.py imports DaVinciResolveScript lazily so the package imports
  without Resolve installed
"""
