from .state_machine import StateMachine, SamplerState

__all__ = ["StateMachine", "SamplerState"]
