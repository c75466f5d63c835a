# materials.py
# Closed set of item materials that can be referenced as fuel, and the
# lenient name lookup used when reading them back from config.
from __future__ import annotations
import re
from enum import Enum
from typing import Any, Optional

class Material(Enum):
    # declaration order is the order fuel entries are written in
    STICK = "STICK"
    WOOD = "WOOD"
    LOG = "LOG"
    SAPLING = "SAPLING"
    COAL = "COAL"
    COAL_ORE = "COAL_ORE"
    COAL_BLOCK = "COAL_BLOCK"
    CHARCOAL = "CHARCOAL"
    BLAZE_ROD = "BLAZE_ROD"
    BLAZE_POWDER = "BLAZE_POWDER"
    LAVA_BUCKET = "LAVA_BUCKET"
    REDSTONE = "REDSTONE"
    REDSTONE_BLOCK = "REDSTONE_BLOCK"
    GLOWSTONE_DUST = "GLOWSTONE_DUST"
    GLOWSTONE = "GLOWSTONE"
    IRON_INGOT = "IRON_INGOT"
    IRON_BLOCK = "IRON_BLOCK"
    GOLD_NUGGET = "GOLD_NUGGET"
    GOLD_INGOT = "GOLD_INGOT"
    GOLD_BLOCK = "GOLD_BLOCK"
    EMERALD = "EMERALD"
    EMERALD_BLOCK = "EMERALD_BLOCK"
    DIAMOND = "DIAMOND"
    DIAMOND_BLOCK = "DIAMOND_BLOCK"
    NETHER_STAR = "NETHER_STAR"
    ENDER_PEARL = "ENDER_PEARL"
    EYE_OF_ENDER = "EYE_OF_ENDER"
    SULPHUR = "SULPHUR"
    TNT = "TNT"

_NAMESPACE = "MINECRAFT:"
_SPACES = re.compile(r"[\s\-]+")
_NON_WORD = re.compile(r"\W")

def match_material(name: Any) -> Optional[Material]:
    """
    Resolve a user-written material name to its Material, or None.
    'coal block', 'minecraft:coal_block' and 'Coal-Block' all give COAL_BLOCK.
    """
    if not isinstance(name, str):
        return None
    filtered = name.strip().upper()
    if filtered.startswith(_NAMESPACE):
        filtered = filtered[len(_NAMESPACE):]
    filtered = _NON_WORD.sub("", _SPACES.sub("_", filtered))
    if not filtered:
        return None
    return Material.__members__.get(filtered)
