from .metadata import MetadataResolverPort
from .result_extractor import ResultExtractorPort
from .search_client import SearchClientPort

__all__ = [
    "MetadataResolverPort",
    "ResultExtractorPort",
    "SearchClientPort",
]
