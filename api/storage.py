"""
Storage access for the API.

A single StorageClient is constructed when the `api` app is ready and handed
to the views. It runs ORM calls against one database alias and reports
data-level failures as StorageError values carrying an ErrorKind, so callers
decide on a response by kind instead of by inspecting driver messages.
"""

import enum
import logging
from contextlib import contextmanager

from django.core.exceptions import ObjectDoesNotExist, ValidationError as DjangoValidationError
from django.db import DEFAULT_DB_ALIAS, IntegrityError, connections, transaction
from django.db.models import ProtectedError

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    NOT_FOUND = 'not_found'
    CONFLICT = 'conflict'
    PROTECTED = 'protected'


class StorageError(Exception):
    """
    A storage operation failed for a reason the caller can act on.

    ``blocking_count`` is set for PROTECTED failures and holds the number of
    rows that still reference the record.
    """

    def __init__(self, kind: ErrorKind, message: str, blocking_count: int = 0):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.blocking_count = blocking_count


class StorageClient:
    """
    Process-wide handle on one database alias.

    Django manages the underlying connection per thread; ``connect`` and
    ``close`` let the process entry point open it eagerly and release it on
    shutdown.
    """

    def __init__(self, alias: str = DEFAULT_DB_ALIAS):
        self.alias = alias

    def __repr__(self):
        return f"StorageClient(alias={self.alias!r})"

    @property
    def connection(self):
        return connections[self.alias]

    def connect(self):
        self.connection.ensure_connection()
        logger.info("Storage connection opened on '%s'.", self.alias)

    def close(self):
        self.connection.close()
        logger.info("Storage connection closed on '%s'.", self.alias)

    @contextmanager
    def translate_errors(self):
        """
        Runs the enclosed writes in a savepoint and converts constraint
        failures into StorageError. The savepoint keeps an outer transaction
        usable after a failed write.
        """
        try:
            with transaction.atomic(using=self.alias):
                yield
        except ProtectedError as exc:
            raise StorageError(
                ErrorKind.PROTECTED,
                "Record is still referenced by other records",
                blocking_count=len(exc.protected_objects),
            ) from exc
        except IntegrityError as exc:
            logger.warning("Integrity error on '%s': %s", self.alias, exc)
            raise StorageError(ErrorKind.CONFLICT, "Record conflicts with an existing record") from exc
        except ObjectDoesNotExist as exc:
            raise StorageError(ErrorKind.NOT_FOUND, str(exc)) from exc

    def fetch(self, queryset, **lookup):
        """Returns the single row of ``queryset`` matching ``lookup``."""
        try:
            return queryset.using(self.alias).get(**lookup)
        except (ObjectDoesNotExist, ValueError, DjangoValidationError) as exc:
            raise StorageError(ErrorKind.NOT_FOUND, f"No {queryset.model._meta.verbose_name} matches {lookup}") from exc

    def exists(self, queryset, **lookup) -> bool:
        return queryset.using(self.alias).filter(**lookup).exists()

    def delete(self, instance):
        with self.translate_errors():
            instance.delete(using=self.alias)
