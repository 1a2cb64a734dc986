import argparse
import json
import logging
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional

from tqdm import tqdm

from propdoc.adapters.react_adapter import adapt_react_components
from propdoc.base.models import ComponentMetadata, ExtractError, ExtractResult
from propdoc.cache import ExtractionCache
from propdoc.config import ERROR_HANDLING_MODES, ExtractConfig, load_config
from propdoc.errors import ConfigError, ExtractionError, SourceParseError
from propdoc.registry.extractor_registry import extractor_for_file, get_extractor
from propdoc.scanner import read_source, relative_path, scan_files
from propdoc.utils.networkx_graph import build_graph_from_schema, write_graph

logger = logging.getLogger(__name__)

LOGGER_NAME = "propdoc"


def configure_logging(verbose: bool = False) -> logging.Logger:
    level = logging.DEBUG if verbose else logging.INFO
    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.propagate = False
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[propdoc] %(levelname)s %(message)s"))
    root_logger.addHandler(handler)
    return root_logger


def _default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


def _hook_result(result, original):
    return original if result is None else result


def _extract_file(file_path: str, config: ExtractConfig, extractors, cache) -> List[ComponentMetadata]:
    if cache is not None:
        cached = cache.get(file_path)
        if cached is not None:
            logger.debug("Cache hit for %s", file_path)
            return cached

    rel_path = relative_path(file_path, config.root)
    extractor = extractor_for_file(rel_path, extractors)
    if extractor is None:
        return []
    extracted = extractor.extract(rel_path, read_source(file_path))

    for plugin in extractors:
        extracted = [_hook_result(plugin.after_extract(item), item) for item in extracted]

    if cache is not None:
        cache.set(file_path, extracted)
    return extracted


def _to_error(file_path: str, root: str, exc: Exception) -> ExtractError:
    error = ExtractError(file_path=relative_path(file_path, root), message=str(exc))
    if isinstance(exc, SourceParseError):
        error.line = exc.line
        error.column = exc.column
    return error


def extract_metadata(config: ExtractConfig, extractors=(), progress: bool = False,
                     cache: Optional[ExtractionCache] = None) -> ExtractResult:
    """
    Run extraction over every file selected by ``config``.

    Custom ``extractors`` are consulted before the built-in React extractor.
    Files are processed in a thread pool but results keep the sorted scan
    order. Per-file failures follow ``config.error_handling``.
    """
    start = time.monotonic()
    extractors = list(extractors) + [get_extractor("react", usage_examples=config.usage_examples)]
    if cache is None and config.cache:
        cache = ExtractionCache()

    for plugin in extractors:
        plugin.before_scan(config)

    files = scan_files(config)
    for plugin in extractors:
        files = list(_hook_result(plugin.after_scan(files), files))
    logger.info("Extracting components from %d file(s) under %s", len(files), config.root)

    results: List[Optional[List[ComponentMetadata]]] = [None] * len(files)
    indexed_errors = []

    with ThreadPoolExecutor(max_workers=config.workers or _default_workers()) as executor:
        futures = {
            executor.submit(_extract_file, file_path, config, extractors, cache): index
            for index, file_path in enumerate(files)
        }
        completed = as_completed(futures)
        if progress:
            completed = tqdm(completed, total=len(futures), desc="Extracting components", unit="file")
        for future in completed:
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                error = _to_error(files[index], config.root, e)
                logger.warning("Unable to process %s: %s", error.file_path, error.message)
                if config.error_handling == "throw":
                    for pending in futures:
                        pending.cancel()
                    raise ExtractionError("Extraction failed", [error]) from e
                if config.error_handling == "collect":
                    indexed_errors.append((index, error))

    errors = [error for _, error in sorted(indexed_errors, key=lambda item: item[0])]
    metadata: List[ComponentMetadata] = []
    for extracted in results:
        if extracted:
            metadata.extend(extracted)

    for plugin in extractors:
        metadata = list(_hook_result(plugin.after_all(metadata, config), metadata))

    stats = {
        "filesScanned": len(files),
        "filesProcessed": sum(1 for r in results if r is not None),
        "componentsFound": len(metadata),
        "duration": round((time.monotonic() - start) * 1000),
    }
    logger.info("Found %d component(s) in %d file(s)", stats["componentsFound"], stats["filesProcessed"])
    return ExtractResult(metadata=metadata, errors=errors, stats=stats)


def write_metadata(components, output_path: str) -> None:
    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([c.to_dict() for c in components], f, indent=2, ensure_ascii=False)


def create_graph(components, graph_dir: str):
    schema = adapt_react_components([c.to_dict() for c in components])
    G = build_graph_from_schema(schema)
    return write_graph(G, graph_dir)


def run_extract(args) -> int:
    overrides = {
        "root": args.root,
        "output": args.output,
        "include": args.include,
        "exclude": args.exclude,
        "error_handling": args.error_handling,
        "cache": True if args.cache else None,
        "usage_examples": True if args.usage_examples else None,
        "graph_dir": args.graph_dir,
        "workers": args.workers,
    }
    config = load_config(args.config, root=args.root, overrides=overrides)

    print(f"Root: {config.root}")
    print(f"Include: {', '.join(config.include)}")

    result = extract_metadata(config, progress=not args.no_progress)

    print("Extraction complete")
    print(f"  Files scanned: {result.stats['filesScanned']}")
    print(f"  Files processed: {result.stats['filesProcessed']}")
    print(f"  Components found: {result.stats['componentsFound']}")

    if result.errors:
        print(f"{len(result.errors)} error(s):")
        for error in result.errors:
            print(f"  {error.file_path}: {error.message}")

    if config.output:
        write_metadata(result.metadata, config.output)
        print(f"Output saved to {config.output}")

    if config.graph_dir:
        graph_ml, graph_gp = create_graph(result.metadata, config.graph_dir)
        print(f"Wrote {graph_ml} and {graph_gp}")

    return 1 if result.errors else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="propdoc", description="Extract React component metadata")
    subparsers = parser.add_subparsers(dest="function", help="Available functions")

    parser_extract = subparsers.add_parser("extract", help="Extract component metadata from source files")
    parser_extract.add_argument("root", help="Root directory to scan for source files")
    parser_extract.add_argument("--config", help="Path to a TOML config file")
    parser_extract.add_argument("--output", help="Output JSON file (default: ./metadata.json)")
    parser_extract.add_argument("--include", action="append", help="Include glob, may be repeated")
    parser_extract.add_argument("--exclude", action="append", help="Exclude glob, may be repeated")
    parser_extract.add_argument("--error_handling", choices=ERROR_HANDLING_MODES,
                                help="Per-file failure policy (default: collect)")
    parser_extract.add_argument("--cache", action="store_true", help="Cache results by modification time")
    parser_extract.add_argument("--usage_examples", action="store_true",
                                help="Render prop examples as JSX usage snippets")
    parser_extract.add_argument("--graph_dir", help="Also write the component graph to this directory")
    parser_extract.add_argument("--workers", type=int, help="Number of worker threads")
    parser_extract.add_argument("--no_progress", action="store_true", help="Hide the progress bar")
    parser_extract.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.function:
        parser.print_help()
        return 0

    configure_logging(args.verbose)
    try:
        if args.function == "extract":
            return run_extract(args)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1
    except ExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        for error in e.errors:
            print(f"  {error.file_path}: {error.message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
