"""
Connection source implementation using the 'psutil' library.

This module provides the PsutilConnectionSource class, which enumerates
running processes and asks the OS for each one's open inet sockets, with no
subprocess involved.
"""

import logging
import socket
import time
from typing import Iterable, List, Optional

import psutil

from ..classification.matcher import process_in_config
from ..classification.protocols import STATE_NONE
from ..models.connections import ConnectionRecord
from ..validation import PartialReadFailure, SourceUnavailable
from .base import AbstractConnectionSource

logger = logging.getLogger(__name__)

# (family, type) pairs reported by psutil, named the way netstat names them
# so both sources publish identical protocol labels.
SOCKET_PROTOCOLS = {
    (socket.AF_INET, socket.SOCK_STREAM): "tcp",
    (socket.AF_INET6, socket.SOCK_STREAM): "tcp6",
    (socket.AF_INET, socket.SOCK_DGRAM): "udp",
    (socket.AF_INET6, socket.SOCK_DGRAM): "udp6",
}


def _split_address(address) -> tuple:
    """Return (ip, port) from a psutil address tuple; empty means unbound."""
    if not address:
        return "*", "*"
    return str(address[0]), str(address[1])


class PsutilConnectionSource(AbstractConnectionSource):
    """
    Collects connections by querying each process's sockets through psutil.

    Processes that disappear or cannot be inspected during the scan are
    skipped; the remaining processes still contribute their connections.

    Attributes:
        process_filter: Optional process name fragments. When set, only
            processes whose name contains one of them are queried for
            connections, which avoids a per-process syscall for the rest of
            the system.

    Note:
        `acquisition_timeout` is checked between processes. A single
        `net_connections()` call that blocks inside the OS is not interrupted,
        so one stuck process can hold the scan past the deadline.
    """

    name = "psutil"

    def __init__(
        self,
        acquisition_timeout: float = 10.0,
        process_filter: Optional[Iterable[str]] = None,
        **kwargs,
    ):
        super().__init__(acquisition_timeout, **kwargs)
        self.process_filter = tuple(process_filter) if process_filter else ()
        # Attributes pre-fetched by psutil.process_iter for each process.
        self._iter_attrs = ["pid", "name"]

    def _read_process(self, proc: psutil.Process) -> List[ConnectionRecord]:
        """
        Read the inet connections of a single process.

        Raises:
            PartialReadFailure: If the process vanished or cannot be inspected.
        """
        pid = proc.info.get("pid", proc.pid)
        name = proc.info.get("name")
        if name is None:
            raise PartialReadFailure(f"name of PID {pid} is not readable", pid=pid)

        try:
            connections = proc.net_connections(kind="inet")
        except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess) as e:
            raise PartialReadFailure(
                f"connections of PID {pid} ({name}) are not readable: {type(e).__name__}",
                pid=pid,
            ) from e

        records = []
        for conn in connections:
            protocol = SOCKET_PROTOCOLS.get((conn.family, conn.type))
            if protocol is None:
                logger.debug(
                    f"Ignoring socket of PID {pid} with family {conn.family!r} and type {conn.type!r}"
                )
                continue
            local_address, local_port = _split_address(conn.laddr)
            remote_address, remote_port = _split_address(conn.raddr)
            records.append(
                ConnectionRecord(
                    protocol=protocol,
                    local_address=local_address,
                    local_port=local_port,
                    remote_address=remote_address,
                    remote_port=remote_port,
                    state=conn.status or STATE_NONE,
                    pid=pid,
                    process_name=name,
                )
            )
        return records

    def acquire(self) -> List[ConnectionRecord]:
        """
        Scans all processes once and returns the union of their connections.

        Raises:
            SourceUnavailable: If process enumeration fails or the scan
                exceeds the acquisition timeout.
        """
        deadline = time.monotonic() + self.acquisition_timeout
        records: List[ConnectionRecord] = []
        processes_scanned = 0
        processes_skipped = 0

        try:
            for proc in psutil.process_iter(self._iter_attrs):
                if time.monotonic() > deadline:
                    raise SourceUnavailable(
                        f"process scan exceeded {self.acquisition_timeout}s "
                        f"after {processes_scanned} processes"
                    )
                processes_scanned += 1

                if self.process_filter and not process_in_config(
                    proc.info.get("name"), self.process_filter
                ):
                    continue

                try:
                    records.extend(self._read_process(proc))
                except PartialReadFailure as e:
                    processes_skipped += 1
                    logger.debug(f"Skipping process: {e}")
        except psutil.Error as e:
            raise SourceUnavailable(f"process enumeration failed: {e}") from e

        logger.debug(
            f"Scanned {processes_scanned} processes, skipped {processes_skipped}, "
            f"found {len(records)} connections"
        )
        return records
