"""Shared utility functions for express-scaffold.

Provides async command execution, Rich-based console reporting, duration
formatting, and the bind-probe port finder that mirrors the one embedded in
the generated ``server.js``.
"""

from __future__ import annotations

import asyncio
import os
import socket
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 120,
) -> tuple[int, str, str]:
    """Run a command asynchronously and capture its output.

    Args:
        cmd: Executable and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timed-out command
        reports ``-1`` and a "timed out" message in stderr.

    Raises:
        FileNotFoundError: If the executable is missing.
    """
    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(3.7)    -> "3.7s"
        format_duration(65.2)   -> "1m 5s"
        format_duration(3661.0) -> "1h 1m 1s"
    """
    if seconds < 0:
        return "0.0s"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = seconds % 60

    parts: list[str] = []
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if hours > 0 or minutes > 0:
        parts.append(f"{int(secs)}s")
    else:
        parts.append(f"{secs:.1f}s")

    return " ".join(parts)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_info(message: str) -> None:
    """Print a dimmed informational message."""
    console.print(f"[dim]{message}[/dim]")


# ---------------------------------------------------------------------------
# Port helpers
# ---------------------------------------------------------------------------

MAX_PORT = 65535

# Same rule asyncio uses for create_server; Node also sets it on listen().
_REUSE_ADDRESS = os.name == "posix" and sys.platform != "cygwin"


async def probe_port(port: int, host: str = "", timeout: float = 2.0) -> bool:
    """Check whether a TCP port can be bound right now.

    Binds a throwaway listening socket on *host* (all interfaces by default)
    and closes it straight away.  ``SO_REUSEADDR`` is set on POSIX so a port
    lingering in TIME_WAIT counts as free, as it does for Node's listener.
    Nothing is reserved: another process may take the port between this
    probe and the caller's real bind.

    Args:
        port: Port number to probe.
        host: Interface to bind; ``""`` means all interfaces.
        timeout: Seconds to wait for the bind before treating the port as taken.

    Returns:
        ``True`` if the bind succeeded.
    """
    loop = asyncio.get_running_loop()

    def _probe() -> bool:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            if _REUSE_ADDRESS:
                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((host, port))
            sock.listen(1)
            return True
        except (OSError, OverflowError):
            # OverflowError: port outside 0-65535
            return False
        finally:
            sock.close()

    try:
        return await asyncio.wait_for(
            loop.run_in_executor(None, _probe), timeout=timeout
        )
    except asyncio.TimeoutError:
        return False


async def find_available_port(
    preferred_port: int,
    max_port: int = MAX_PORT,
    *,
    host: str = "",
    probe_timeout: float = 2.0,
) -> int | None:
    """Return the first bindable port at or above *preferred_port*.

    Ports are probed one at a time, strictly upward, up to and including
    *max_port*.  *preferred_port* itself is always probed, even when it is
    already above the ceiling.

    Returns:
        The chosen port, or ``None`` once the ceiling is reached without a
        successful bind.
    """
    candidate = preferred_port
    while True:
        if await probe_port(candidate, host=host, timeout=probe_timeout):
            return candidate
        if candidate >= max_port:
            return None
        candidate += 1
