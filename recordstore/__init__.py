from flask import Flask
from .config import Config
from .extensions import cors, init_dictionaries


def create_app(config_class: type[Config] = Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(overrides)
    app.json.sort_keys = app.config.get("JSON_SORT_KEYS", False)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Extensions
    cors.init_app(app)
    init_dictionaries(app)

    # Blueprints
    from .routes.stores_api import bp as stores_api

    app.register_blueprint(stores_api, url_prefix="/api")

    # CLI
    from .cli.commands import stores_cli

    app.cli.add_command(stores_cli)

    return app
