from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from photo_studio.agents.product_photo_agent.agent.product_photo_agent import ProductPhotoAgent
from photo_studio.agents.product_photo_agent.services.product_photo_agent_service import ProductPhotoAgentService
from photo_studio.agents.product_photo_agent.services.studio_session import StudioSession


# =============================================================================
# AGENT DEPENDENCIES
# =============================================================================
def get_product_photo_agent() -> ProductPhotoAgent:
    """Provide a configured ProductPhotoAgent instance."""
    return ProductPhotoAgent()


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

def get_product_photo_agent_service(
        product_photo_agent: Annotated[ProductPhotoAgent, Depends(get_product_photo_agent)]
) -> ProductPhotoAgentService:
    """Provide a configured ProductPhotoAgentService instance."""
    return ProductPhotoAgentService(product_photo_agent)


@lru_cache
def get_studio_session() -> StudioSession:
    """Provide the single StudioSession shared by every request of this process."""
    return StudioSession(ProductPhotoAgentService(ProductPhotoAgent()))


# =============================================================================
# TYPE ALIASES FOR DEPENDENCY INJECTION
# =============================================================================

StudioSessionDependency = Annotated[StudioSession, Depends(get_studio_session)]

# Service Dependencies
ProductPhotoAgentServiceDependency = Annotated[
    ProductPhotoAgentService, Depends(get_product_photo_agent_service)]
