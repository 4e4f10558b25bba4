"""Repository for ordered encounter name pools."""
from __future__ import annotations

from typing import Dict

from questforge.data.repositories.base import RepositoryBase
from questforge.domain.defs import NamePoolDef


class NamePoolsRepository(RepositoryBase[NamePoolDef]):
    """Loads name pools (arena challengers, boss names)."""

    def __init__(self, base_path=None) -> None:
        super().__init__("name_pools.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, NamePoolDef]:
        pools: Dict[str, NamePoolDef] = {}
        for pool_id, payload in raw.items():
            context = f"name_pools.{pool_id}"
            data = self._require_mapping(payload, context)
            pools[pool_id] = NamePoolDef(
                id=pool_id,
                names=self._require_str_tuple(data.get("names"), f"{context}.names"),
                fallback_template=self._require_str(
                    data.get("fallback_template", "Wave {index} Champion"), f"{context}.fallback_template"
                ),
            )
        return pools
