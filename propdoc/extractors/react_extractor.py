import logging
import os
import threading
from typing import List

from propdoc.base.component_extractor import ComponentExtractor
from propdoc.base.models import ComponentMetadata
from propdoc.errors import SourceParseError
from propdoc.extractors.components import extract_components
from propdoc.extractors.tsx_tree import create_parser, first_error, lower_program

logger = logging.getLogger(__name__)

REACT_EXTENSIONS = (".tsx", ".jsx", ".ts", ".js")


class ReactComponentExtractor(ComponentExtractor):
    """Extracts React component metadata from TSX/JSX/TS/JS sources."""

    name = "react-extractor"

    def __init__(self, usage_examples: bool = False):
        super().__init__()
        self.usage_examples = usage_examples
        self._local = threading.local()

    def test(self, file_path: str) -> bool:
        return file_path.endswith(REACT_EXTENSIONS)

    def _parser(self, file_path: str):
        # plain .ts files use the grammar without JSX so `<T>x` casts parse
        tsx = not file_path.endswith(".ts")
        attr = "tsx_parser" if tsx else "ts_parser"
        parser = getattr(self._local, attr, None)
        if parser is None:
            parser = create_parser(tsx)
            setattr(self._local, attr, parser)
        return parser

    def parse(self, file_path: str, content: str):
        tree = self._parser(file_path).parse(content.encode("utf-8"))
        error = first_error(tree.root_node)
        if error is not None:
            row, column = error.start_point
            raise SourceParseError(file_path, row + 1, column + 1)
        return tree

    def extract(self, file_path: str, content: str) -> List[ComponentMetadata]:
        tree = self.parse(file_path, content)
        program = lower_program(tree.root_node)
        components = extract_components(program, file_path, usage_examples=self.usage_examples)
        logger.debug("Found %d component(s) in %s", len(components), os.path.basename(file_path))
        return components
