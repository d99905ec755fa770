"""A configuration store backed by a remote, optionally encrypted, document.

The store fetches the whole document on load(), keeps it in memory for
the accessors, and writes it to a local file on save(). A single lock
covers every operation, so a slow fetch blocks readers until it is done.

    store = ConfigStore("https://config.example.com/app.ini#someiv",
                        filename="/var/lib/app/app.ini")
    store.load()
    store.set_value("remote", "type", "s3")
    store.save()

"""

import logging
import os
import threading
from typing import List
from typing import Optional
from typing import Tuple

from sealedconfig import crypt
from sealedconfig import document
from sealedconfig import exceptions
from sealedconfig import formats
from sealedconfig import loaders
from sealedconfig import settings


logger = logging.getLogger(__name__)


def is_ephemeral(section: str) -> bool:
    """On the fly sections are built from connection strings and never persisted."""
    return section.startswith(settings.EPHEMERAL_PREFIX)


class ConfigStore:
    def __init__(
            self,
            location: str,
            filename: Optional[str] = None,
            timeout_s: float = settings.DEFAULT_TIMEOUT_S,
            format: Optional[formats.Format] = None,
            fetcher: Optional[loaders.AbstractFetcher] = None,
            key: bytes = crypt.ENCRYPT_KEY,
    ):
        self._lock = threading.Lock()
        self.location, self._iv = settings.split_iv(location or "")
        if filename is None:
            filename = settings.default_filename(self.location)
        self.filename = filename
        if format is None:
            format = formats.format_for_filename(self.location, default=formats.Format.Ini)
        self._codec = formats.codec_for_format(format)
        self._fetcher = fetcher or loaders.fetcher_for_location(self.location, timeout_s)
        self._key = key
        self._document = document.Document()

    @classmethod
    def from_settings(cls, s: settings.Settings, **kwargs):
        return cls(s.location, filename=s.filename, timeout_s=s.timeout_s, **kwargs)

    @classmethod
    def from_env(cls, environ=None, **kwargs):
        return cls.from_settings(settings.Settings.from_env(environ), **kwargs)

    @property
    def is_encrypted(self) -> bool:
        return self._iv is not None

    def load(self) -> None:
        """Replaces the document with the one at the store's location.

        On any failure the store is left holding an empty document.
        """
        with self._lock:
            loaded = None
            try:
                loaded = self._load()
            finally:
                if loaded is None:
                    logger.info("load of %r failed, starting from an empty config", self.location)
                    loaded = document.Document()
                self._document = loaded

    def _load(self) -> document.Document:
        if not self.location:
            raise exceptions.ConfigNotFound("config location is empty")
        if settings.is_new_config(self.location):
            logger.debug("%s is a new config, not fetching", self.location)
            return document.Document()
        with self._fetcher.load(self.location) as data:
            if self._iv is not None:
                data = crypt.decrypt(data, self._key, self._iv)
            doc = self._codec.parse(data)
        logger.debug("loaded %d sections from %s (encrypted=%s)", len(doc), self.location, self.is_encrypted)
        return doc

    def save(self) -> None:
        with self._lock:
            filename = self.filename
            if not filename:
                raise exceptions.EmptyDestination("config filename is empty")
            data = self._codec.serialize(self._document)
            if self._iv is not None:
                data = crypt.encrypt(data, self._key, self._iv)
            try:
                fd = os.open(filename, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o600)
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
            except OSError as e:
                raise exceptions.WriteFailure(filename, e) from e
            logger.debug("saved %d bytes to %s (encrypted=%s)", len(data), filename, self.is_encrypted)

    def has_section(self, section: str) -> bool:
        with self._lock:
            return self._document.has_section(section)

    def get_section_list(self) -> List[str]:
        with self._lock:
            return self._document.section_list()

    def get_key_list(self, section: str) -> List[str]:
        with self._lock:
            return self._document.key_list(section)

    def get_value(self, section: str, key: str) -> Tuple[str, bool]:
        with self._lock:
            return self._document.get_value(section, key)

    def set_value(self, section: str, key: str, value: str) -> None:
        with self._lock:
            if is_ephemeral(section):
                logger.warning("can't save config %r for on the fly backend %r", key, section)
                return
            self._document.set_value(section, key, value)

    def delete_key(self, section: str, key: str) -> bool:
        with self._lock:
            return self._document.delete_key(section, key)

    def delete_section(self, section: str) -> None:
        with self._lock:
            self._document.delete_section(section)

    def __repr__(self):
        return "ConfigStore(%r)" % self.location
