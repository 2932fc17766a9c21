"""Error family for the analysis and chat pipeline.

Three kinds of failure reach the caller:
  - InvalidInputError: the request itself is malformed; nothing was called.
  - FetchError: the target page could not be fetched as text.
  - CollaboratorError (and subclasses): an embedding, index, storage, cache or
    generation backend failed. The original exception is chained.
"""


class SeoAgentError(Exception):
    """Base class for every error raised by the pipeline."""


class InvalidInputError(SeoAgentError):
    """Missing or malformed request field."""


class FetchError(SeoAgentError):
    """Target URL unreachable, non-2xx, or not a text response."""


class CollaboratorError(SeoAgentError):
    """A backing service failed."""


class EmbeddingError(CollaboratorError):
    pass


class VectorIndexError(CollaboratorError):
    pass


class StorageError(CollaboratorError):
    pass


class CacheError(CollaboratorError):
    pass


class GenerationError(CollaboratorError):
    pass
