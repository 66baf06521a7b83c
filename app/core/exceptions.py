"""Domain exceptions raised by core modules and services"""


class RepurposerError(Exception):
    """Base class for application errors"""


class MissingAPIKeyError(RepurposerError):
    """The language model API key is absent or rejected"""


class ProcessingError(RepurposerError):
    """The language model call failed"""


class ExtractionError(RepurposerError):
    """Text could not be extracted from a source"""


class InvalidURLError(RepurposerError):
    """A submitted URL could not be parsed"""


class UnknownContentTypeError(RepurposerError):
    """Content type could not be detected and none was given"""


class StorageError(RepurposerError):
    """Object store operation failed"""


class NotFoundError(RepurposerError):
    """A referenced record does not exist"""


class JobStateError(RepurposerError):
    """A job transition is not allowed from its current status"""
