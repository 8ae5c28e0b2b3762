# recordstore/extensions.py
from pathlib import Path

from flask import Flask, current_app
from flask_cors import CORS

from .storage.collection import DictionaryCollection

# CORS is a real Flask extension (keeps init_app)
cors = CORS()

EXTENSION_KEY = "dictionaries"


def init_dictionaries(app: Flask) -> DictionaryCollection:
    """Load the collection for DATA_DIR and attach it to the app."""
    collection = DictionaryCollection(Path(app.config["DATA_DIR"])).init()
    app.extensions[EXTENSION_KEY] = collection
    app.logger.info("Loaded %d dictionaries from %s", len(collection), collection.path)
    return collection


def get_collection() -> DictionaryCollection:
    return current_app.extensions[EXTENSION_KEY]
