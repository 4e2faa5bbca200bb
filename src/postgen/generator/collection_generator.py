"""Generate a Postman collection file from discovered controllers."""

import logging
import random
from pathlib import Path

from ..model import ApplicationDescriptor
from .collection import DEFAULT_BASE_URL, Collection, assemble_collection
from .serializer import write_collection

logger = logging.getLogger(__name__)


class CollectionGenerator:
    """Generate a Postman v2.1 collection from an application descriptor."""

    def __init__(
        self,
        output_path: Path,
        base_url: str = DEFAULT_BASE_URL,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the collection generator.

        Args:
            output_path: File the collection is written to
            base_url: Origin used for request URLs
            rng: Random source for the exporter id
        """
        self.output_path = output_path
        self.base_url = base_url
        self.rng = rng
        self.collection: Collection | None = None

    def generate(self, application: ApplicationDescriptor) -> Path:
        """Assemble the collection and write it to the output path.

        Args:
            application: Discovered controllers and methods

        Returns:
            Path to the written collection

        Raises:
            OSError: If the output path is not writable
        """
        self.collection = assemble_collection(application, base_url=self.base_url, rng=self.rng)
        output_path = write_collection(self.collection, self.output_path)
        logger.info(
            "Generated collection with %d groups at %s", len(self.collection.item), output_path
        )
        return output_path
