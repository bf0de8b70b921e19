"""
Setup system for creating and storing initial field layouts.

A setup carries everything needed to start a game:
- The brick layout, as the three 27-bit masks the judge sends
- Which side the controlled agent plays
- Optional agent specs for local matches
"""

from __future__ import annotations

import json
import random
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional, Sequence

from infra.logger import get_logger
from infra.paths import PROJECT_ROOT, SETUP_STORAGE_DIR
from .core.constants import (
    BASE_POSITIONS,
    FIELD_HEIGHT,
    FIELD_WIDTH,
    MASK_WORDS,
    ROWS_PER_MASK,
    START_POSITIONS,
    STEEL_POSITIONS,
)
from .core.types import GridPos, Side

if TYPE_CHECKING:
    from agents import AgentSpec

logger = get_logger(__name__)

# Cells that can never hold a brick.
RESERVED_CELLS = frozenset(
    list(BASE_POSITIONS.values())
    + list(STEEL_POSITIONS)
    + [pos for positions in START_POSITIONS.values() for pos in positions]
)


def decode_brick_masks(masks: Sequence[int]) -> List[GridPos]:
    """Return brick positions encoded in the judge's three mask words."""
    if len(masks) != MASK_WORDS:
        raise ValueError(f"Expected {MASK_WORDS} brick mask words, got {len(masks)}")

    bricks: List[GridPos] = []
    for word_index, word in enumerate(masks):
        bit = 0
        for y in range(word_index * ROWS_PER_MASK, (word_index + 1) * ROWS_PER_MASK):
            for x in range(FIELD_WIDTH):
                if word & (1 << bit):
                    bricks.append((x, y))
                bit += 1
    return bricks


def encode_brick_masks(bricks: Iterable[GridPos]) -> List[int]:
    """Inverse of decode_brick_masks."""
    masks = [0] * MASK_WORDS
    for x, y in bricks:
        if not (0 <= x < FIELD_WIDTH and 0 <= y < FIELD_HEIGHT):
            raise ValueError(f"Brick position out of bounds: {(x, y)}")
        word_index, row = divmod(y, ROWS_PER_MASK)
        masks[word_index] |= 1 << (row * FIELD_WIDTH + x)
    return masks


class Setup:
    """
    Initial layout of one game.

    Example:
        setup = Setup.from_bricks([(0, 3), (8, 5)], my_side=Side.RED)
        setup.save_json("my_setup.json")
        setup = Setup.load_json("my_setup.json")
    """

    def __init__(
        self,
        brick_masks: Sequence[int] = (0, 0, 0),
        my_side: Side = Side.BLUE,
        seed: Optional[int] = None,
        agents: Optional[List["AgentSpec"]] = None,
    ):
        """
        Args:
            brick_masks: Three 27-bit words, rows 0-2, 3-5 and 6-8
            my_side: Side played by the controlled agent
            seed: Seed used to generate the layout, if any
            agents: Optional list of AgentSpec (one per side) for local matches
        """
        if len(brick_masks) != MASK_WORDS:
            raise ValueError(f"Expected {MASK_WORDS} brick mask words, got {len(brick_masks)}")
        self.brick_masks = [int(m) for m in brick_masks]
        self.my_side = Side(my_side)
        self.seed = seed
        self.agents: Optional[List["AgentSpec"]] = agents

    @classmethod
    def from_bricks(cls, bricks: Iterable[GridPos], my_side: Side = Side.BLUE, **kwargs: Any) -> Setup:
        return cls(encode_brick_masks(bricks), my_side=my_side, **kwargs)

    def brick_positions(self) -> List[GridPos]:
        """Brick cells, excluding any that collide with bases, steel or start cells."""
        return [pos for pos in decode_brick_masks(self.brick_masks) if pos not in RESERVED_CELLS]

    def clone(self) -> Setup:
        return Setup.from_dict(self.to_dict())

    def to_request(self) -> Dict[str, Any]:
        """The judge's first-turn request for this setup."""
        return {"field": list(self.brick_masks), "mySide": int(self.my_side)}

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "field": list(self.brick_masks),
            "mySide": int(self.my_side),
            "seed": self.seed,
        }
        if self.agents is not None:
            data["agents"] = self._serialize_agents(self.agents)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Setup:
        if "field" not in data:
            raise ValueError("Setup must contain a 'field' list of brick masks")
        return cls(
            brick_masks=data["field"],
            my_side=Side(data.get("mySide", 0)),
            seed=data.get("seed"),
            agents=cls._deserialize_agents(data.get("agents")),
        )

    @staticmethod
    def _serialize_agents(agents: List["AgentSpec"]) -> List[Dict[str, Any]]:
        # Local import to avoid circular imports during module load
        from agents import AgentSpec
        return [a.to_dict() if isinstance(a, AgentSpec) else a for a in agents]

    @staticmethod
    def _deserialize_agents(data: Any) -> Optional[List["AgentSpec"]]:
        if data is None:
            return None
        from agents import AgentSpec
        agents_list: List[AgentSpec] = []
        for value in data:
            if isinstance(value, AgentSpec):
                agents_list.append(value)
            elif isinstance(value, dict):
                agents_list.append(AgentSpec.from_dict(value))
            else:
                raise TypeError(f"Agent definition must be AgentSpec or dict, got {type(value)}")
        return agents_list

    def save_json(self, filepath: str | Path | None = None, indent: int = 2) -> Path:
        """
        Save setup to a JSON file.

        Args:
            filepath: Target path. If None, saves under storage/setups with a timestamped name.
            indent: JSON indentation (default: 2)
        """
        if filepath is None:
            SETUP_STORAGE_DIR.mkdir(parents=True, exist_ok=True)
            timestamp = time.strftime("%Y%m%d_%H%M%S")
            filepath = SETUP_STORAGE_DIR / f"setup_{timestamp}.json"
        else:
            filepath = Path(filepath)
            if not filepath.is_absolute():
                filepath = PROJECT_ROOT / filepath
            filepath.parent.mkdir(parents=True, exist_ok=True)

        logger.info("Saving setup JSON to %s", filepath)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=indent)
        return filepath

    @classmethod
    def load_json(cls, filepath: str | Path) -> Setup:
        with open(filepath, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))

    def __repr__(self) -> str:
        return f"Setup(bricks={len(self.brick_positions())}, my_side={self.my_side.name})"


# =============================================================================
# SETUP BUILDERS
# =============================================================================

def create_empty_setup(my_side: Side = Side.BLUE) -> Setup:
    """A field with no bricks: only bases, steel and tanks."""
    return Setup(my_side=my_side)


def create_random_setup(
    seed: Optional[int] = None,
    density: float = 0.3,
    my_side: Side = Side.BLUE,
) -> Setup:
    """
    Generate a brick layout that is symmetric under 180-degree rotation,
    so neither side is favoured.

    Args:
        seed: Random seed (None = random)
        density: Probability that a free cell pair receives bricks
        my_side: Side played by the controlled agent
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"Brick density must be in [0, 1]: {density}")

    rng = random.Random(seed)
    bricks: List[GridPos] = []
    for y in range(FIELD_HEIGHT):
        for x in range(FIELD_WIDTH):
            mirror = (FIELD_WIDTH - 1 - x, FIELD_HEIGHT - 1 - y)
            if (y, x) > (mirror[1], mirror[0]):
                continue
            if (x, y) in RESERVED_CELLS or rng.random() >= density:
                continue
            bricks.append((x, y))
            if mirror != (x, y):
                bricks.append(mirror)

    return Setup.from_bricks(bricks, my_side=my_side, seed=seed)


if __name__ == "__main__":
    # Can be run via python -m env.setup
    from infra.logger import configure_logging
    configure_logging(level="INFO")
    create_random_setup(seed=42).save_json()
