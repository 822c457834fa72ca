from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Tuple

from ..domain.models import Step
from ..data.troubleshooting_steps import HARDCODED_STEPS, ROOT_STEP_ID


# The Interface
class StepCatalog(ABC):
    """
    Defines how the application reads the troubleshooting decision tree.
    The catalog is immutable for the lifetime of the process.
    """

    root_step_id: int

    @abstractmethod
    def get(self, step_id: int) -> Optional[Step]:
        """
        Retrieves a step by ID.
        Returns None for an unknown ID; callers decide how to fall back.
        """
        pass

    @abstractmethod
    def step_ids(self) -> List[int]:
        """All step IDs in ascending order."""
        pass

    @property
    def root(self) -> Step:
        return self.get(self.root_step_id)


class StaticStepCatalog(StepCatalog):
    """
    Serves steps from a hardcoded mapping held in memory.
    """

    def __init__(
        self,
        steps: Mapping[int, Step] = HARDCODED_STEPS,
        root_step_id: int = ROOT_STEP_ID,
    ):
        # Index for O(1) lookup
        self._index: Dict[int, Step] = dict(steps)
        self.root_step_id = root_step_id

        if root_step_id not in self._index:
            raise ValueError(f"Root step {root_step_id} is not in the catalog.")

        dangling = self.dangling_references()
        if dangling:
            refs = ", ".join(f"{step_id}->{target}" for step_id, target in dangling)
            raise ValueError(f"Catalog has options pointing at missing steps: {refs}")

    def get(self, step_id: int) -> Optional[Step]:
        return self._index.get(step_id)

    def step_ids(self) -> List[int]:
        return sorted(self._index)

    def dangling_references(self) -> List[Tuple[int, int]]:
        """(step_id, missing_target) pairs for numeric outcomes with no step behind them."""
        dangling = []
        for step in self._index.values():
            for option in step.options:
                if isinstance(option.outcome, int) and option.outcome not in self._index:
                    dangling.append((step.id, option.outcome))
        return dangling
