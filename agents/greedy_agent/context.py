from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from env.core.types import GridPos, Side, TankKey
from env.entities import Tank
from env.world import FieldState
from ..team_intel import TeamIntel
from .distance_oracle import DistanceOracle
from .predictor import MovementPredictor
from .target_selector import TargetSelector
from .threat_map import ThreatMap


@dataclass
class DecisionContext:
    """
    Everything the greedy policy needs for one turn.

    Built fresh at the start of every decision cycle; the distance table is
    computed exactly once here and shared by every component.
    """

    world: FieldState
    intel: TeamIntel
    oracle: DistanceOracle
    selector: TargetSelector
    predictions: Dict[TankKey, GridPos]
    threat: ThreatMap

    @classmethod
    def build(cls, world: FieldState, side: Side) -> DecisionContext:
        intel = TeamIntel.build(world, side)
        oracle = DistanceOracle(world.grid)
        selector = TargetSelector(world.grid, oracle)
        predictions = MovementPredictor(world.grid, oracle, selector).predict_all(intel)
        threat = ThreatMap(
            world.grid,
            enemy_sources=[predictions[tank.key] for tank in intel.alive_enemies],
            own_sources=[tank.pos for tank in intel.alive_friendlies],
        )
        return cls(
            world=world,
            intel=intel,
            oracle=oracle,
            selector=selector,
            predictions=predictions,
            threat=threat,
        )

    @property
    def side(self) -> Side:
        return self.intel.side

    def predicted_enemies(self) -> List[tuple[Tank, GridPos]]:
        """(enemy, predicted cell) for alive enemies, in index order."""
        return [(tank, self.predictions[tank.key]) for tank in self.intel.alive_enemies]

    def goal_for(self, tank: Tank) -> Optional[GridPos]:
        if not tank.alive:
            return None
        return self.selector.choose_target(tank.pos, tank.side)
