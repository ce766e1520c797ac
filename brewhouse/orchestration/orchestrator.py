from typing import Dict, List, Any
import logging

from brewhouse.models import ProcessSet
from brewhouse.sensors import MeasurementGenerator
from brewhouse.services.query_service import QueryService
from brewhouse.services.sampler import SamplerLoop
from brewhouse.storage import CatalogStore, Database, ReviewStore, TimeSeriesStore
from .state_machine import OrchestrationStateMachine, OrchestrationState
from .commands import (
    OrchestrationCommand,
    StorageSetupCommand,
    CatalogSeedCommand,
    SamplerStartCommand,
)

class BrewhouseOrchestrator:
    """Wires the components together and runs startup/shutdown as commands"""

    def __init__(self, config):
        self.config = config
        processes = ProcessSet(config.processes)
        database = Database(config.database_url)
        generator = MeasurementGenerator(processes, seed=config.generator_seed)
        timeseries = TimeSeriesStore(database, processes, read_timeout=config.store_timeout)

        self.database = database
        self.processes = processes
        self.generator = generator
        self.timeseries = timeseries
        self.catalog = CatalogStore(database)
        self.reviews = ReviewStore(database)
        self.sampler = SamplerLoop(generator, timeseries, processes, interval=config.sample_interval)
        self.queries = QueryService(generator, timeseries, processes,
                                    tail_limit=config.tail_limit, tz=config.tz)

        self.state_machine = OrchestrationStateMachine()
        self.context: Dict[str, Any] = {
            "config": config,
            "database": database,
            "catalog": self.catalog,
            "sampler": self.sampler,
        }
        self.executed_commands: List[OrchestrationCommand] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def operational(self) -> bool:
        return self.state_machine.current_state is OrchestrationState.OPERATIONAL

    async def startup(self) -> bool:
        """Execute startup sequence using command pattern"""
        try:
            command_sequence = [
                (StorageSetupCommand, OrchestrationState.STORAGE_SETUP),
                (CatalogSeedCommand, OrchestrationState.CATALOG_SEEDING),
                (SamplerStartCommand, OrchestrationState.SAMPLER_STARTUP),
            ]

            for command_class, target_state in command_sequence:
                if not self.state_machine.transition_to(target_state):
                    raise RuntimeError(f"Failed to transition to {target_state}")

                command = command_class(self.context)
                result = await command.execute()
                # A command that failed may still hold resources; roll it back too
                self.executed_commands.append(command)

                if not result.get("success", False):
                    await self._rollback_commands()
                    self.state_machine.transition_to(OrchestrationState.ERROR_RECOVERY)
                    return False

                self.context.update(result)

            self.state_machine.transition_to(OrchestrationState.OPERATIONAL)
            self.logger.info("Brewhouse monitor ready (%s)", ", ".join(self.processes))
            return True

        except Exception as e:
            self.logger.error(f"Orchestration startup failed: {e}")
            await self._rollback_commands()
            self.state_machine.transition_to(OrchestrationState.ERROR_RECOVERY)
            return False

    async def _rollback_commands(self):
        """Rollback executed commands in reverse order"""
        for command in reversed(self.executed_commands):
            try:
                await command.rollback()
            except Exception as e:
                self.logger.error(f"Error during rollback: {e}")

        self.executed_commands.clear()

    async def shutdown(self):
        """Graceful shutdown"""
        self.state_machine.transition_to(OrchestrationState.SHUTDOWN)
        await self._rollback_commands()
        self.logger.info("Orchestration shutdown completed")
