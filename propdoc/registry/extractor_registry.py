from propdoc.extractors.react_extractor import ReactComponentExtractor


def get_extractor(name: str, **options):
    key = name.lower()
    if key in ("react", "react-extractor"):
        return ReactComponentExtractor(**options)
    raise ValueError(f"No extractor named: {name}")


def extractor_for_file(file_path: str, extractors):
    for extractor in extractors:
        if extractor.test(file_path):
            return extractor
    return None
