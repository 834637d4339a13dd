"""Exception types raised by the generator pipeline"""


class GeneratorError(Exception):
    """Base class for all generator errors"""
    pass


class ConfigurationError(GeneratorError):
    """Configuration-related errors"""
    pass


class SourceArchiveError(GeneratorError):
    """Download, cache or extraction failures"""
    pass


class RasterizeError(GeneratorError):
    """SVG discovery or conversion failures"""
    pass
