"""
containerps - A live container inventory with one-click lifecycle actions.

This package lists the containers known to the local container engine, shows
them as a menu grouped by lifecycle (up, restarting, down) and lets the
operator start, stop, restart, delete, open a shell into, or copy the id of
any of them.

Main Components:
  - backend.py: External command runner, engine check, clipboard and terminal helpers
  - parser.py: Converts one line of the engine listing into a Container
  - inventory.py: Builds the menu model from the engine listing
  - actions.py: Lifecycle action dispatcher
  - state.py: Refresh state machine and application context
  - textual_app.py: Textual presentation sink
  - model.py: Data structures (Container, menu items, confirmation request)

Usage:
  python -m containerps

Dependencies:
  - docker>=7.0.0
  - PyYAML
  - textual
  - Python 3.10+
"""

import os
from pathlib import Path

__version__ = "0.1.0"


def get_log_path() -> str:
    """
    Get the log file path following XDG Base Directory spec.

    Returns XDG_DATA_HOME/containerps/logs/containerps.log with fallback to /tmp.
    Creates directory if it doesn't exist.

    Returns:
        str: Absolute path to log file (/tmp/containerps.log as fallback)
    """
    xdg_data_home = os.environ.get('XDG_DATA_HOME')
    if not xdg_data_home:
        home = Path.home()
        xdg_data_home = home / '.local' / 'share'
    else:
        xdg_data_home = Path(xdg_data_home)

    log_dir = xdg_data_home / 'containerps' / 'logs'

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return str(log_dir / 'containerps.log')
    except (PermissionError, OSError):
        return '/tmp/containerps.log'
