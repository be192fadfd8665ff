# Copyright Amazon.com Inc. or its affiliates.
# SPDX-License-Identifier: MIT-0

"""
In memory representation of a Lambda payload zip file.

The payload is read completely when it is loaded, so a corrupt or truncated
zip file is detected before anything gets generated or uploaded. Entries that
already exist in the payload are written back with their original bytes,
timestamps and permissions.
"""

import io
import time
import zipfile
import zlib
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .errors import MalformedArchiveError
from .logger import configure_logger

LOGGER = configure_logger(__name__)

# Regular file, readable by the Lambda runtime user (-rw-r--r--)
GENERATED_FILE_MODE = 0o100644
UNIX_CREATE_SYSTEM = 3

# Errors zipfile can raise while reading a damaged or unsupported archive
ZIP_READ_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    RuntimeError,
    ValueError,
)


@dataclass
class ZipEntry:
    info: zipfile.ZipInfo
    data: bytes

    @property
    def path(self) -> str:
        return self.info.filename

    def copy_info(self) -> zipfile.ZipInfo:
        """
        Return a fresh ZipInfo carrying the metadata of this entry, so
        writing it does not mutate the loaded one.
        """
        info = zipfile.ZipInfo(self.info.filename, self.info.date_time)
        info.compress_type = self.info.compress_type
        info.external_attr = self.info.external_attr
        info.create_system = self.info.create_system
        info.comment = self.info.comment
        return info


class LambdaZip:
    """
    Class used for modeling the contents of a Lambda payload zip
    """

    def __init__(self, entries: Optional[List[ZipEntry]] = None):
        self._entries: Dict[str, ZipEntry] = {}
        for entry in entries or []:
            self._entries[entry.path] = entry

    @classmethod
    def load(cls, data: bytes) -> "LambdaZip":
        """
        Parse the bytes of a zip file.

        Args:
            data (bytes): The raw zip file.

        Returns:
            LambdaZip: The parsed payload.

        Raises:
            MalformedArchiveError: When the data is not a readable zip file.
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                entries = [
                    ZipEntry(info, archive.read(info))
                    for info in archive.infolist()
                ]
        except ZIP_READ_ERRORS as error:
            raise MalformedArchiveError(
                f"Unable to read zip file: {error}"
            ) from error
        LOGGER.debug("Loaded zip file with %d entries", len(entries))
        return cls(entries)

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ZipEntry]:
        return iter(self._entries.values())

    def names(self) -> List[str]:
        return list(self._entries)

    def read(self, path: str) -> bytes:
        return self._entries[path].data

    def add_or_replace(self, path: str, contents: str) -> None:
        """
        Write a UTF-8 text file into the payload. An entry that already
        exists at the same path is replaced in place.

        Args:
            path (str): The path of the file inside the zip.

            contents (str): The text contents of the file.
        """
        info = zipfile.ZipInfo(path, time.localtime(time.time())[:6])
        info.compress_type = zipfile.ZIP_DEFLATED
        info.external_attr = GENERATED_FILE_MODE << 16
        info.create_system = UNIX_CREATE_SYSTEM
        if path in self._entries:
            LOGGER.info("Replacing existing file %s in zip", path)
        self._entries[path] = ZipEntry(info, contents.encode('utf-8'))

    def serialize(self) -> bytes:
        """
        Write all entries to a new zip file.

        Returns:
            bytes: The zip file contents.
        """
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
            for entry in self._entries.values():
                archive.writestr(entry.copy_info(), entry.data)
        return buffer.getvalue()
