from typing import TYPE_CHECKING
from ...infrastructure.db.mongo_connection import (
    get_database,
    get_captured_image_collection,
    get_images_bucket,
)

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class DatabaseProvider:
    """Centralized database connection provider - single source of truth for all DB connections"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register the database, the metadata collection and the image bucket.
        The motor client connects lazily, so registration never blocks on MongoDB.
        """
        container.register_singleton("database", get_database())
        container.register_singleton("captured_image_collection", get_captured_image_collection())
        container.register_singleton("images_bucket", get_images_bucket())
