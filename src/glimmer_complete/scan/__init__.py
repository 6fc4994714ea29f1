from glimmer_complete.scan.filesystem import CachedFileSource, FilesystemSource

__all__ = [
    "CachedFileSource",
    "FilesystemSource",
]
