"""
Crowd-learned alias store.

Reads and records label -> field mappings that users confirmed by hand,
through a PostgREST-style HTTP endpoint. Both directions degrade quietly:
a parse must never fail because the alias store is down.
"""
from __future__ import annotations

from typing import List, Optional

import requests

from ..config import Config
from ..logger import get_logger
from ..models import CrowdAlias

logger = get_logger(__name__)

ALIAS_TABLE = "smart_paste_aliases"
RECORD_RPC = "upsert_smart_paste_alias"


class CrowdAliasStore:
    """
    Client for the shared alias table.

    Example:
        >>> store = CrowdAliasStore("https://db.example.com/rest/v1", api_key="...")
        >>> aliases = store.fetch(min_usage=3)
        >>> result = parse(text, schema, crowd_aliases=aliases)
    """

    def __init__(
        self,
        base_url: Optional[str],
        api_key: Optional[str] = None,
        timeout_s: int = 5,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            base_url: REST root of the alias service; None disables the store
            api_key: Service key sent as ``apikey`` and bearer token
            timeout_s: Request timeout in seconds
            session: Optional requests session (tests inject one)
        """
        self.base_url = base_url.rstrip("/") if base_url else None
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls) -> CrowdAliasStore:
        """Build a store from CROWD_ALIAS_* settings."""
        return cls(
            Config.CROWD_ALIAS_URL,
            api_key=Config.CROWD_ALIAS_API_KEY,
            timeout_s=Config.CROWD_ALIAS_TIMEOUT_S,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def fetch(self, min_usage: int = 3) -> List[CrowdAlias]:
        """
        Fetch aliases used at least ``min_usage`` times, most used first.

        Returns:
            List of CrowdAlias ([] when disabled or on any failure)
        """
        if not self.enabled:
            return []

        params = {
            "select": "source_key,spec_name,usage_count",
            "usage_count": f"gte.{min_usage}",
            "order": "usage_count.desc",
        }
        try:
            r = self.session.get(
                f"{self.base_url}/{ALIAS_TABLE}",
                params=params,
                headers=self._headers(),
                timeout=self.timeout_s,
            )
            r.raise_for_status()
            rows = r.json()
        except requests.RequestException as e:
            logger.warning("Crowd aliases not available: %s: %s", type(e).__name__, e)
            return []
        except ValueError as e:
            logger.warning("Crowd aliases response was not JSON: %s", e)
            return []

        if not isinstance(rows, list):
            logger.warning("Crowd aliases response was not a list: %s", type(rows).__name__)
            return []

        aliases = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            source_key = row.get("source_key")
            spec_name = row.get("spec_name")
            if not source_key or not spec_name:
                continue
            try:
                usage = int(row.get("usage_count") or 0)
            except (TypeError, ValueError):
                continue
            aliases.append(CrowdAlias(source_key=source_key, target_field=spec_name, usage_count=usage))

        logger.debug("Fetched %d crowd aliases (min_usage=%d)", len(aliases), min_usage)
        return aliases

    def record(self, source_key: str, spec_name: str, category: Optional[str] = None) -> bool:
        """
        Record that a user mapped ``source_key`` onto ``spec_name``.

        The store increments the usage count of an existing mapping.

        Returns:
            True if the store accepted the mapping; failures are logged, never raised
        """
        if not self.enabled or not source_key or not spec_name:
            return False

        payload = {
            "p_source_key": source_key.lower().strip(),
            "p_spec_name": spec_name,
            "p_category": category or None,
        }
        try:
            r = self.session.post(
                f"{self.base_url}/rpc/{RECORD_RPC}",
                json=payload,
                headers=self._headers(),
                timeout=self.timeout_s,
            )
            r.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Failed to record alias '%s' -> '%s': %s", source_key, spec_name, e)
            return False

        logger.info("Recorded alias '%s' -> '%s'", payload["p_source_key"], spec_name)
        return True
