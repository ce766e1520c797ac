from abc import ABC, abstractmethod
from typing import Any, Dict
import logging

class OrchestrationCommand(ABC):
    """Base class for orchestration commands"""

    def __init__(self, context: Dict[str, Any]):
        self.context = context
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def execute(self) -> Dict[str, Any]:
        """Execute the command and return results"""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback command effects if possible"""
        pass

class StorageSetupCommand(OrchestrationCommand):
    """Command to create the database schema"""

    async def execute(self) -> Dict[str, Any]:
        db = self.context.get("database")
        if db is None:
            raise ValueError("Database not found in context")

        try:
            await db.create_schema()
            return {"success": True}
        except Exception as e:
            self.logger.error(f"Storage setup failed: {e}")
            return {"success": False, "error": str(e)}

    async def rollback(self) -> None:
        db = self.context.get("database")
        if db is not None:
            db.dispose()

class CatalogSeedCommand(OrchestrationCommand):
    """Command to seed the default beers into an empty catalog"""

    async def execute(self) -> Dict[str, Any]:
        config = self.context["config"]
        if not config.seed_catalog:
            self.logger.info("Catalog seeding disabled")
            return {"seeded": 0, "success": True}

        try:
            seeded = await self.context["catalog"].seed_defaults()
            return {"seeded": seeded, "success": True}
        except Exception as e:
            self.logger.error(f"Catalog seeding failed: {e}")
            return {"success": False, "error": str(e)}

    async def rollback(self) -> None:
        # Seeded rows are ordinary catalog data and stay in place
        pass

class SamplerStartCommand(OrchestrationCommand):
    """Command to start the background sensor sampler"""

    async def execute(self) -> Dict[str, Any]:
        config = self.context["config"]
        sampler = self.context["sampler"]
        if not config.sampler_enabled:
            self.logger.info("Sampler disabled by configuration")
            return {"success": True}

        try:
            sampler.start()
            return {"success": True}
        except Exception as e:
            self.logger.error(f"Sampler startup failed: {e}")
            return {"success": False, "error": str(e)}

    async def rollback(self) -> None:
        sampler = self.context.get("sampler")
        if sampler is not None:
            await sampler.stop()
