"""
Application entry point when executed as a module, e.g.

.. code:: console

    python -m mediamenu.core
"""

import sys

from .main import run

if __name__ == "__main__":
    sys.exit(run())
