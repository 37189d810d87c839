"""Persistence/broadcast collaborator contract for the theme editor."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

from themecomposer.errors import ErrorCode, PersistenceError, classify_exception

logger = logging.getLogger(__name__)


class PersistenceGateway(Protocol):
    """Storage and broadcast for one theme variant.

    Implementations may raise any exception; callers wrap failures in
    ``PersistenceError``.
    """

    def fetch(self, theme_id: str) -> Mapping[str, Any] | None: ...

    def create(self, data: Mapping[str, Any]) -> Mapping[str, Any]: ...

    def update(self, theme_id: str, data: Mapping[str, Any]) -> None: ...

    def apply(self, data: Mapping[str, Any]) -> None: ...


def perform_save(gateway: PersistenceGateway, theme_id: str, payload: Mapping[str, Any]) -> str:
    """Write ``payload`` then broadcast it; return the persisted theme id.

    Updates when ``theme_id`` is set, creates otherwise. ``apply`` only runs
    once the write has succeeded.
    """
    try:
        if theme_id:
            gateway.update(theme_id, payload)
            saved_id = theme_id
        else:
            created = gateway.create(payload)
            saved_id = _created_id(created)
    except PersistenceError:
        raise
    except Exception as exc:
        raise classify_exception(exc) from exc

    try:
        gateway.apply({**payload, "id": saved_id})
    except Exception as exc:
        error = classify_exception(exc)
        raise PersistenceError(
            ErrorCode.APPLY_FAILED,
            details={**error.details, "theme_id": saved_id},
        ) from exc
    logger.info("saved and applied theme %s", saved_id)
    return saved_id


def _created_id(created: Any) -> str:
    theme_id = created.get("id") if isinstance(created, Mapping) else None
    if not isinstance(theme_id, str) or not theme_id:
        raise PersistenceError(
            ErrorCode.PERSIST_FAILED,
            message="Theme storage did not return an id for the new theme.",
            details={"response": repr(created)},
        )
    return theme_id
