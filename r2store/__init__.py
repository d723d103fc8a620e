"""Upload and delete objects in Cloudflare R2 with uniform results."""

from r2store.common.config import R2Options, get_options, load_options_file
from r2store.domain.results import ClientError, ClientResult
from r2store.infra.storage import (
    ExistenceCheckError,
    ObjectStoreClient,
    R2Client,
    StorageError,
    create_r2_client,
)

__version__ = "0.1.0"

__all__ = [
    "ClientError",
    "ClientResult",
    "ExistenceCheckError",
    "ObjectStoreClient",
    "R2Client",
    "R2Options",
    "StorageError",
    "create_r2_client",
    "get_options",
    "load_options_file",
]
