from abc import ABC, abstractmethod
from typing import List

from propdoc.base.models import ComponentMetadata


class ComponentExtractor(ABC):
    """
    Base class of extractor plugins.

    ``test`` and ``extract`` are the extraction contract; the ``before_scan``,
    ``after_scan``, ``after_extract`` and ``after_all`` hooks are called by
    the driver and may return a replacement value (``None`` keeps the input).
    """

    name = "extractor"

    @abstractmethod
    def test(self, file_path: str) -> bool:
        pass

    @abstractmethod
    def extract(self, file_path: str, content: str) -> List[ComponentMetadata]:
        pass

    def before_scan(self, config):
        return None

    def after_scan(self, files):
        return None

    def after_extract(self, item: ComponentMetadata):
        return None

    def after_all(self, metadata, config):
        return None
