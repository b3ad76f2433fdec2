"""
DocumentWise Engine
===================

Client-side engine for the DocumentWise proposal and signature analysis app.

Modules:
- api_client: HTTP clients for the DocumentWise and chat APIs
- transforms: API payload -> client model conversion
- proposal_store: cached proposal reads with invalidation on mutation
- chat: optimistic chat thread state
- viewer: document viewer state (page, zoom, HTML preview)
- mock_data: in-memory repositories for offline use
"""

# Version
__version__ = "1.3.0"

# Lazy imports to avoid loading Streamlit on import
def get_repositories(config=None):
    """Build the proposal and chat repositories for a configuration."""
    from .config import read_config
    from .session import build_repositories
    return build_repositories(config or read_config())


def get_mock_repositories():
    """In-memory proposal and chat repositories seeded with sample data."""
    from .mock_data import InMemoryChatRepository, InMemoryProposalRepository
    return InMemoryProposalRepository(), InMemoryChatRepository()
