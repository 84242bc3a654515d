"""MiniGit CLI Application.

Command-line interface for the MiniGit version-control engine.

Execution Context:
    CLI application - invoked from terminal

Dependencies:
    - click: CLI framework
    - rich: Terminal formatting
    - minigit_core: Core library

Metadata:
    Version: 0.1.0
    Author: MiniGit Team
"""
from __future__ import annotations

__version__ = "0.1.0"
