"""
mizzle_pipeline – interceptor pipeline for collection data access.

Import path convention::

    from mizzle_pipeline.pipeline import Pipeline, compose, on_reads
    from mizzle_pipeline.middlewares import caching_middleware, retry_middleware
    from mizzle_pipeline.stores import MemoryCacheStore
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
