from enum import Enum, auto
from typing import Dict, List

class SamplerState(Enum):
    IDLE      = auto()
    RUNNING   = auto()
    STOPPING  = auto()
    STOPPED   = auto()

class StateMachine:
    def __init__(self, initial: SamplerState = SamplerState.IDLE):
        self._state = initial
        self._trans: Dict[SamplerState, List[SamplerState]] = {
            SamplerState.IDLE:     [SamplerState.RUNNING, SamplerState.STOPPED],
            SamplerState.RUNNING:  [SamplerState.STOPPING],
            SamplerState.STOPPING: [SamplerState.STOPPED],
            SamplerState.STOPPED:  [],
        }

    @property
    def state(self) -> SamplerState: return self._state

    def can(self, nxt: SamplerState) -> bool: return nxt in self._trans[self._state]

    def transition(self, nxt: SamplerState) -> bool:
        if self.can(nxt):
            self._state = nxt
            return True
        return False
