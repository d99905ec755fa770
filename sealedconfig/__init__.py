"""Encrypted remote configuration store."""

from sealedconfig.crypt import ENCRYPT_KEY
from sealedconfig.document import Document
from sealedconfig.exceptions import CipherError
from sealedconfig.exceptions import ConfigNotFound
from sealedconfig.exceptions import DecryptError
from sealedconfig.exceptions import EmptyDestination
from sealedconfig.exceptions import EncryptError
from sealedconfig.exceptions import HTTPStatusError
from sealedconfig.exceptions import SerializationError
from sealedconfig.exceptions import StoreError
from sealedconfig.exceptions import TransportError
from sealedconfig.exceptions import WriteFailure
from sealedconfig.formats import Format
from sealedconfig.settings import Settings
from sealedconfig.store import ConfigStore
from sealedconfig.store import is_ephemeral
