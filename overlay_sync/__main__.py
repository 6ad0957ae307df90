"""Package entry point for ``python -m overlay_sync``.

WHY: Resolve's scripting console and a terminal both run the engine as
``python -m overlay_sync``. Python's ``-m`` flag looks for
``__main__.py`` inside the package and executes it.

HOW: Delegates straight to the CLI's main() function.
"""

from overlay_sync.cli import main

if __name__ == "__main__":
    main()
