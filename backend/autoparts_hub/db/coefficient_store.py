"""
Coefficient store — per-user markup configuration in Supabase.

One row per user in ``client_coefficients``. A save rewrites the whole row,
per-key overrides included, so nothing from an earlier save survives unless
the caller carries it forward. Saves for the same user are serialized.

Rows tagged ``coef_unit = 'factor'`` (1.25 style) are converted to percent
on load; every save writes percent.
Version: 1.0.0
"""

import asyncio
import json
import logging
from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from autoparts_hub.core.config import settings
from autoparts_hub.core.constants.pricing import COEF_UNIT_FACTOR, COEF_UNIT_PERCENT
from autoparts_hub.db.base_store import BaseStore
from autoparts_hub.schemas.coefficients import CoefficientConfig, normalize_mode
from autoparts_hub.utils.pricing import factor_to_percent
from autoparts_hub.utils.type_converters import to_number

logger = logging.getLogger("coefficient_store")


def _to_percent(value: Any, unit: str) -> Optional[float]:
    number = to_number(value)
    if number is None:
        return None
    return factor_to_percent(number) if unit == COEF_UNIT_FACTOR else number


def _parse_per_key(raw: Any) -> Dict[str, Any]:
    if raw is None:
        return {}
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning("unparseable per-key coefficients, ignoring: %r", raw[:100])
            return {}
    return raw if isinstance(raw, dict) else {}


def row_to_config(row: Dict[str, Any]) -> CoefficientConfig:
    """Build a percent-based config from a stored row."""
    unit = (row.get("coef_unit") or COEF_UNIT_PERCENT).lower()
    per_key: Dict[str, float] = {}
    for key, value in _parse_per_key(row.get("subcategory_coefs")).items():
        percent = _to_percent(value, unit)
        if percent is not None:
            per_key[str(key)] = percent
    return CoefficientConfig(
        mode=normalize_mode(row.get("mode")),
        general_value=_to_percent(row.get("general_coef"), unit),
        per_key_values=per_key,
    )


def config_to_row(user_id: str, config: CoefficientConfig) -> Dict[str, Any]:
    return {
        "user_id": user_id,
        "mode": config.mode,
        "general_coef": config.general_value,
        "subcategory_coefs": dict(config.per_key_values),
        "coef_unit": COEF_UNIT_PERCENT,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    }


class CoefficientStore(BaseStore):
    """Load/save of the ``client_coefficients`` table."""

    def __init__(self, supabase_client=None, table: str | None = None) -> None:
        super().__init__(supabase_client)
        self._table = table or settings.coefficients_table
        # Per-user save locks, dropped once no save for that user is pending
        self._save_locks: Dict[str, asyncio.Lock] = {}
        self._pending_saves: Dict[str, int] = defaultdict(int)

    async def load(self, user_id: str) -> Optional[CoefficientConfig]:
        """Return the user's configuration, or None when they have none yet."""
        rows = await self._select(self._table, "*", {"user_id": user_id})
        if not rows:
            logger.info("no coefficient config for user=%s, using defaults", user_id)
            return None
        return row_to_config(rows[0])

    async def save(self, user_id: str, config: CoefficientConfig) -> bool:
        """
        Replace the user's stored configuration.

        Raises PersistenceFailure; a later save for the same user waits
        until this one has finished either way.
        """
        row = config_to_row(user_id, config)
        lock = self._save_locks.setdefault(user_id, asyncio.Lock())
        self._pending_saves[user_id] += 1
        try:
            async with lock:
                await self._upsert(self._table, [row], on_conflict="user_id")
        finally:
            self._pending_saves[user_id] -= 1
            if not self._pending_saves[user_id]:
                del self._pending_saves[user_id]
                del self._save_locks[user_id]
        logger.info(
            "saved coefficient config user=%s mode=%s keys=%s",
            user_id, config.mode, len(config.per_key_values),
        )
        return True
