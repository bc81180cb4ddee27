"""Drill / weekly policy storage."""

from defense_drill.store.base import DrillStore
from defense_drill.store.memory import InMemoryDrillStore
from defense_drill.store.yaml_store import DrillDataFile, YamlDrillStore

__all__ = [
    "DrillDataFile",
    "DrillStore",
    "InMemoryDrillStore",
    "YamlDrillStore",
]
