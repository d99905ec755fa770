class StoreError(Exception):
    pass


class ConfigNotFound(StoreError):
    pass


class TransportError(StoreError):
    """Propagates a failure to reach the data source.

    Carries the location being fetched and the underlying exception
    (connection refused, timeout, DNS failure, truncated body...).
    """
    def __init__(self, location, cause, *args):
        super(TransportError, self).__init__(
            "could not fetch %s: %s" % (location, cause), *args)
        self.location = location
        self.cause = cause


class HTTPStatusError(StoreError):
    def __init__(self, status, body, *args):
        super(HTTPStatusError, self).__init__("HTTP:%d, %s" % (status, body), *args)
        self.status = status
        self.body = body


class CipherError(StoreError):
    pass


class DecryptError(CipherError):
    pass


class EncryptError(CipherError):
    pass


class SerializationError(StoreError):
    pass


class EmptyDestination(StoreError):
    pass


class WriteFailure(StoreError):
    def __init__(self, filename, cause, *args):
        super(WriteFailure, self).__init__(
            "could not write %s: %s" % (filename, cause), *args)
        self.filename = filename
        self.cause = cause
