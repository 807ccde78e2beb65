from .cache_availability import check_cache_availability
from .fallback_acquisition import acquire_best_candidate
from .stremio_stream import StremioStreamUseCase, build_search_query

__all__ = [
    "StremioStreamUseCase",
    "acquire_best_candidate",
    "build_search_query",
    "check_cache_availability",
]
