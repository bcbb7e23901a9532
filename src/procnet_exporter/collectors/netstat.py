"""
Connection source implementation using the 'netstat' command-line utility.

This module provides the NetstatConnectionSource class, which runs
`netstat -tanup` (or a configured equivalent) and parses its tabular output
into ConnectionRecord objects.
"""

import logging
import re
from typing import List, Optional, Sequence

from ..classification.protocols import STATE_NONE
from ..models.config import DEFAULT_NETSTAT_COMMAND
from ..models.connections import ConnectionRecord
from ..system.commands import run_command
from ..validation import SourceUnavailable
from .base import AbstractConnectionSource

logger = logging.getLogger(__name__)

# Example `netstat -tanup` data lines:
#   tcp        0      0 0.0.0.0:22          0.0.0.0:*        LISTEN      812/sshd
#   tcp6       0      0 ::1:6379            ::1:51234        ESTABLISHED 977/redis-server
#   udp        0      0 0.0.0.0:68          0.0.0.0:*                    655/dhclient
# Address and port are split on the last colon so IPv6 addresses survive.
# The queue columns and the state are optional; a line owned by "-" (no
# permission to see the owner) does not match.
NETSTAT_LINE_PATTERN = re.compile(
    r"^\s*(?P<protocol>\S+)\s+"
    r"(?:\d+\s+\d+\s+)?"
    r"(?P<local_address>\S+):(?P<local_port>\d+|\*)\s+"
    r"(?P<remote_address>\S+):(?P<remote_port>\d+|\*)\s+"
    r"(?:(?P<state>[A-Z][A-Z0-9_]*)\s+)?"
    r"(?P<pid>\d+)/(?P<process_name>\S+)"
)


def parse_netstat_line(line: str) -> Optional[ConnectionRecord]:
    """
    Parse one line of netstat output.

    Args:
        line: A single line of output.

    Returns:
        A ConnectionRecord, or None for headers, blank or malformed lines.
    """
    match = NETSTAT_LINE_PATTERN.match(line)
    if match is None:
        return None

    return ConnectionRecord(
        protocol=match.group("protocol"),
        local_address=match.group("local_address"),
        local_port=match.group("local_port"),
        remote_address=match.group("remote_address"),
        remote_port=match.group("remote_port"),
        state=match.group("state") or STATE_NONE,
        pid=int(match.group("pid")),
        process_name=match.group("process_name"),
    )


def parse_netstat_output(output: str) -> List[ConnectionRecord]:
    """
    Parse the full stdout of a netstat run.

    Lines that do not look like connection lines are skipped silently.
    """
    records: List[ConnectionRecord] = []
    skipped = 0
    for line in output.splitlines():
        record = parse_netstat_line(line)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    logger.debug(f"Parsed {len(records)} connections from netstat output, skipped {skipped} lines")
    return records


class NetstatConnectionSource(AbstractConnectionSource):
    """
    Collects connections by running a listing utility and parsing its output.

    Attributes:
        command: The command line to execute, as a list of arguments.
    """

    name = "netstat"

    def __init__(
        self,
        command: Optional[Sequence[str]] = None,
        acquisition_timeout: float = 10.0,
        **kwargs,
    ):
        """
        Initializes the NetstatConnectionSource.

        Args:
            command: Command and arguments to run. Defaults to `netstat -tanup`.
            acquisition_timeout: Seconds before the command is killed.
            **kwargs: Passed through to the base class.
        """
        super().__init__(acquisition_timeout, **kwargs)
        self.command: List[str] = list(command or DEFAULT_NETSTAT_COMMAND)

    def acquire(self) -> List[ConnectionRecord]:
        """
        Runs the listing command once and returns the parsed connections.

        Raises:
            SourceUnavailable: If the command cannot be launched, times out or
                exits with a non-zero status.
        """
        returncode, stdout, stderr = run_command(self.command, timeout=self.acquisition_timeout)
        if returncode != 0:
            raise SourceUnavailable(
                f"failed to execute {' '.join(self.command)} "
                f"(exit code {returncode}): {stderr.strip()}"
            )
        if stderr.strip():
            # netstat warns here when not run as root and some owners are hidden
            logger.debug(f"{self.command[0]} stderr: {stderr.strip()}")

        return parse_netstat_output(stdout)
