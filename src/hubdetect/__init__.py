"""hubdetect - download, cache and launch Black Duck hub-detect for a Maven project."""

__version__ = "0.1.0"
