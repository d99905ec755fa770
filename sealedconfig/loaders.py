import contextlib
import logging
import time

import requests
import urllib3

from sealedconfig import exceptions
from sealedconfig import settings


logger = logging.getLogger(__name__)


class AbstractFetcher:
    """Fetchers obtain the raw bytes of a document from an external source."""
    @contextlib.contextmanager
    def load(self, location):
        raise NotImplementedError


def simple_reader(filename):
    with open(filename, 'rb') as f:
        return f.read()


class FileFetcher(AbstractFetcher):
    def __init__(self, reader=simple_reader):
        if reader is None:
            self.reader = simple_reader
        else:
            self.reader = reader

    @contextlib.contextmanager
    def load(self, location):
        filename = settings.local_path(location)
        try:
            data = self.reader(filename)
        except FileNotFoundError:
            raise exceptions.ConfigNotFound(filename)
        except OSError as e:
            raise exceptions.TransportError(filename, e) from e
        logger.debug("read %d bytes from %s", len(data), filename)
        yield data


class HttpFetcher(AbstractFetcher):
    """Fetches a document with a single HTTP GET.

    There are no retries. A 404 means the document does not exist, any
    other status besides 200 is an error carrying the response body.

    timeout_s bounds the whole exchange, body included, so a server
    trickling bytes cannot hold a load open indefinitely.
    """
    chunk_size = 64 * 1024

    def __init__(self, timeout_s=settings.DEFAULT_TIMEOUT_S, session=None):
        self.timeout_s = timeout_s
        self._session = session

    def get(self, location):
        if self._session is not None:
            return self._session.get(location, timeout=self.timeout_s, stream=True)
        return requests.get(location, timeout=self.timeout_s, stream=True)

    def read_body(self, resp, location, deadline):
        chunks = []
        while True:
            if time.monotonic() > deadline:
                raise exceptions.TransportError(
                    location, requests.Timeout("no complete response within %ss" % self.timeout_s))
            try:
                # read1 makes at most one socket read, so the deadline is
                # checked between every batch of bytes received.
                chunk = resp.raw.read1(self.chunk_size, decode_content=True)
            except (urllib3.exceptions.HTTPError, requests.RequestException, OSError) as e:
                raise exceptions.TransportError(location, e) from e
            if not chunk:
                return b"".join(chunks)
            chunks.append(chunk)

    @contextlib.contextmanager
    def load(self, location):
        deadline = time.monotonic() + self.timeout_s
        try:
            resp = self.get(location)
        except requests.RequestException as e:
            raise exceptions.TransportError(location, e) from e
        with resp:
            logger.debug("GET %s -> %d", location, resp.status_code)
            if resp.status_code == 404:
                raise exceptions.ConfigNotFound(location)
            data = self.read_body(resp, location, deadline)
            if resp.status_code != 200:
                raise exceptions.HTTPStatusError(
                    resp.status_code, data.decode(resp.encoding or "utf8", errors="replace"))
            yield data


def fetcher_for_location(location, timeout_s=settings.DEFAULT_TIMEOUT_S):
    if settings.is_remote(location):
        return HttpFetcher(timeout_s=timeout_s)
    return FileFetcher()
