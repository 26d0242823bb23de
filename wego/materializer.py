"""Recursive mirroring of a remote directory tree into the local filesystem.

Every entry of a listing is dispatched concurrently with ``asyncio.gather``;
a directory entry recurses with its own listing, so a level completes only
once everything beneath it has completed or failed. Failures are printed and
recorded per node and never cancel siblings. There is no rollback, so a
partial tree is left behind when some nodes fail.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from pydantic import BaseModel, Field

from wego.client import RemoteClient
from wego.decoder import decode_bytes
from wego.errors import FilesystemError, WegoError
from wego.models import RemoteDirEntry
from wego.utils import print_done, print_error


class MaterializeReport(BaseModel):
    """What one ``materialize`` call (including nested levels) produced."""

    directories_created: list[str] = Field(default_factory=list)
    files_written: list[str] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list, description="One message per failed node")

    @property
    def success(self) -> bool:
        return not self.failures


def _make_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(str(path), exc.strerror or str(exc)) from exc


def _write_file(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise FilesystemError(str(path), exc.strerror or str(exc)) from exc


class TreeMaterializer:
    """Turns remote directory listings into local files and directories."""

    def __init__(self, client: RemoteClient) -> None:
        self.client = client

    async def materialize(
        self,
        entries: list[RemoteDirEntry],
        local_path: str | Path,
        report: MaterializeReport | None = None,
    ) -> MaterializeReport:
        """Mirror *entries* into *local_path*.

        Args:
            entries: The remote listing for this level.
            local_path: Local directory that receives the entries. Created if
                missing.
            report: Accumulator shared with nested levels; a new one is
                created for the top-level call.

        Returns:
            The report covering this level and everything beneath it.
        """
        report = report if report is not None else MaterializeReport()
        root = Path(local_path)
        try:
            _make_dir(root)
        except FilesystemError as exc:
            print_error(str(exc))
            report.failures.append(str(exc))
            return report

        results = await asyncio.gather(
            *(self._materialize_entry(entry, root / entry.name, report) for entry in entries),
            return_exceptions=True,
        )

        # Anything not already handled per entry still only fails its own node.
        for entry, result in zip(entries, results):
            if isinstance(result, BaseException):
                message = f"Unhandled error for {entry.path}: {result!r}"
                print_error(message)
                report.failures.append(message)
        return report

    async def _materialize_entry(
        self, entry: RemoteDirEntry, target: Path, report: MaterializeReport
    ) -> None:
        try:
            if entry.is_dir:
                await self._materialize_dir(entry, target, report)
            else:
                await self._materialize_file(entry, target, report)
        except WegoError as exc:
            print_error(str(exc))
            report.failures.append(str(exc))

    async def _materialize_dir(
        self, entry: RemoteDirEntry, target: Path, report: MaterializeReport
    ) -> None:
        _make_dir(target)
        report.directories_created.append(str(target))
        print_done(str(target), "Create done!")

        listing = await self.client.fetch_directory(entry.url)
        await self.materialize(listing, target, report)

    async def _materialize_file(
        self, entry: RemoteDirEntry, target: Path, report: MaterializeReport
    ) -> None:
        content = await self.client.fetch_content(entry.url)
        data = decode_bytes(content)
        _write_file(target, data)
        report.files_written.append(str(target))

        if "README" in entry.path and entry.html_url:
            print_done(entry.html_url, "Write done!", style="white")
        else:
            print_done(str(target), "Write done!")
