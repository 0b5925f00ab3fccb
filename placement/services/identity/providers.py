"""
Identity providers.

An identity provider turns an anonymous caller into a durable client
token. The engine depends only on ``resolve()``; where the token lives
(a local key-value file, memory, an HTTP cookie) is the provider's
concern.
"""

import json
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, MutableMapping, Optional, Union
from uuid import uuid4

from placement.core.exceptions import IdentityUnavailable
from placement.core.logging import get_logger
from placement.core.validators import is_valid_client_uuid

logger = get_logger(__name__)

CLIENT_UUID_KEY = "client_uuid"


def generate_client_uuid() -> str:
    return str(uuid4())


class IdentityProvider(ABC):
    """Capability that yields the durable client identity."""

    @abstractmethod
    def resolve(self) -> str:
        """
        Return the client identity, generating and storing it on first use.

        Raises:
            IdentityUnavailable: The backing storage cannot be used
        """


class InMemoryIdentityProvider(IdentityProvider):
    """Identity kept in a mutable mapping, for tests and embedding."""

    def __init__(self, storage: Optional[MutableMapping[str, str]] = None, key: str = CLIENT_UUID_KEY):
        self.storage = storage if storage is not None else {}
        self.key = key
        self._lock = threading.Lock()

    def resolve(self) -> str:
        with self._lock:
            try:
                token = self.storage.get(self.key)
                if token:
                    return token
                token = generate_client_uuid()
                self.storage[self.key] = token
            except (KeyError, TypeError, OSError) as e:
                raise IdentityUnavailable(
                    "Identity storage is not usable",
                    details={"key": self.key, "exception_type": type(e).__name__},
                ) from e
        logger.info("Generated new client identity", extra={"client_uuid": token})
        return token


class LocalFileIdentityProvider(IdentityProvider):
    """
    Identity persisted in a local JSON key-value file.

    The first writer wins: a missing file is created exclusively, and a
    caller that loses that race reads the token the winner stored instead
    of generating its own.
    """

    def __init__(self, path: Union[str, Path], key: str = CLIENT_UUID_KEY):
        self.path = Path(path).expanduser()
        self.key = key
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            raise IdentityUnavailable(
                "Identity store could not be read",
                details={"path": str(self.path), "exception_type": type(e).__name__},
            ) from e
        if not isinstance(data, dict):
            raise IdentityUnavailable(
                "Identity store is malformed",
                details={"path": str(self.path)},
            )
        return data

    def _create_exclusive(self, data: Dict[str, str]) -> bool:
        """Create the store file; False if another writer created it first."""
        try:
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        except FileExistsError:
            return False
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(data, fh)
            fh.flush()
            os.fsync(fh.fileno())
        return True

    def _replace(self, data: Dict[str, str]) -> None:
        tmp_path = self.path.with_name(f".{self.path.name}.{os.getpid()}.tmp")
        with tmp_path.open("w", encoding="utf-8") as fh:
            json.dump(data, fh)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_path, self.path)

    def resolve(self) -> str:
        with self._lock:
            data = self._read()
            token = data.get(self.key)
            if token:
                logger.debug("Loaded client identity from local store", extra={"client_uuid": token})
                return token

            token = generate_client_uuid()
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                if not self.path.exists():
                    if not self._create_exclusive({self.key: token}):
                        winner = self._read().get(self.key)
                        if winner:
                            return winner
                        data = self._read()
                        data[self.key] = token
                        self._replace(data)
                else:
                    data[self.key] = token
                    self._replace(data)
            except OSError as e:
                raise IdentityUnavailable(
                    "Identity store could not be written",
                    details={"path": str(self.path), "exception_type": type(e).__name__},
                ) from e

        logger.info("Generated new client identity", extra={"client_uuid": token})
        return token


class RequestIdentityProvider(IdentityProvider):
    """
    Identity carried by an HTTP request (cookie or header).

    A well-formed token presented by the caller is reused as-is; otherwise
    a new one is issued and ``issued`` is set so the transport can hand it
    back to the client.
    """

    def __init__(self, presented_token: Optional[str]):
        self.presented_token = (presented_token or "").strip() or None
        self.issued = False
        self._token: Optional[str] = None

    def resolve(self) -> str:
        if self._token is not None:
            return self._token

        if self.presented_token and is_valid_client_uuid(self.presented_token):
            self._token = self.presented_token.lower()
            return self._token

        if self.presented_token:
            logger.warning("Ignoring malformed client identity from request")

        self._token = generate_client_uuid()
        self.issued = True
        logger.info("Issued client identity", extra={"client_uuid": self._token})
        return self._token


__all__ = [
    "CLIENT_UUID_KEY",
    "IdentityProvider",
    "InMemoryIdentityProvider",
    "LocalFileIdentityProvider",
    "RequestIdentityProvider",
    "generate_client_uuid",
]
