from .context import DecisionContext
from .distance_oracle import DistanceOracle
from .greedy_agent import GreedyAgent
from .predictor import MovementPredictor
from .target_selector import TargetSelector
from .threat_map import ThreatMap

__all__ = [
    "DecisionContext",
    "DistanceOracle",
    "GreedyAgent",
    "MovementPredictor",
    "TargetSelector",
    "ThreatMap",
]
