from enum import Enum, auto
import logging

class OrchestrationState(Enum):
    INITIALIZING = auto()
    STORAGE_SETUP = auto()
    CATALOG_SEEDING = auto()
    SAMPLER_STARTUP = auto()
    OPERATIONAL = auto()
    ERROR_RECOVERY = auto()
    SHUTDOWN = auto()

class OrchestrationStateMachine:
    """Manages the overall orchestration state transitions"""

    def __init__(self):
        self.current_state = OrchestrationState.INITIALIZING
        self.logger = logging.getLogger(self.__class__.__name__)
        self.valid_transitions = {
            OrchestrationState.INITIALIZING: {OrchestrationState.STORAGE_SETUP, OrchestrationState.SHUTDOWN},
            OrchestrationState.STORAGE_SETUP: {OrchestrationState.CATALOG_SEEDING, OrchestrationState.ERROR_RECOVERY},
            OrchestrationState.CATALOG_SEEDING: {OrchestrationState.SAMPLER_STARTUP, OrchestrationState.ERROR_RECOVERY},
            OrchestrationState.SAMPLER_STARTUP: {OrchestrationState.OPERATIONAL, OrchestrationState.ERROR_RECOVERY},
            OrchestrationState.OPERATIONAL: {OrchestrationState.ERROR_RECOVERY, OrchestrationState.SHUTDOWN},
            OrchestrationState.ERROR_RECOVERY: {OrchestrationState.SHUTDOWN},
            OrchestrationState.SHUTDOWN: set()
        }

    def can_transition_to(self, new_state: OrchestrationState) -> bool:
        return new_state in self.valid_transitions.get(self.current_state, set())

    def transition_to(self, new_state: OrchestrationState) -> bool:
        if self.can_transition_to(new_state):
            self.logger.info(f"State transition: {self.current_state.name} -> {new_state.name}")
            self.current_state = new_state
            return True
        else:
            self.logger.error(f"Invalid state transition: {self.current_state.name} -> {new_state.name}")
            return False
