"""
Execution: the only place external commands are spawned.

    from ptero_bootstrap.core.services.execution import run_command
"""

from ptero_bootstrap.core.services.execution.subprocess_runner import (  # noqa: F401
    command_exists,
    run_command,
)
