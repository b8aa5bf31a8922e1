"""Entry point for running groqchat as a module.

This allows running: python -m groqchat
"""

from .cli import main

if __name__ == "__main__":
    # main() is the CLI boundary and already catches, logs and exits.
    main()
