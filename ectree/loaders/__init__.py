"""Line sources for nomenclature files."""

from ectree.loaders.base import LineLoader, LoaderError, LoaderRegistry
from ectree.loaders.remote import DEFAULT_ENZCLASS_URL, RemoteLoader
from ectree.loaders.text import TextFileLoader

__all__ = [
    "LineLoader",
    "LoaderError",
    "LoaderRegistry",
    "TextFileLoader",
    "RemoteLoader",
    "DEFAULT_ENZCLASS_URL",
]
