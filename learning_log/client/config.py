import os

import click


APP_NAME = 'learning-log'


class ClientConfig:
    """
    Settings for the learning log client.

    Each setting can be given as an environment variable and overridden by the
    matching command-line option.
    """

    def __init__(self, api_url=None, timeout=None, storage_path=None):
        self.api_url = (api_url or os.getenv('LEARNING_LOG_API_URL', default='http://localhost:5000/api')).rstrip('/')
        self.timeout = float(timeout if timeout is not None else os.getenv('LEARNING_LOG_TIMEOUT', default='5'))
        self.storage_path = storage_path or os.getenv('LEARNING_LOG_STORAGE',
                                                      default=os.path.join(click.get_app_dir(APP_NAME), 'storage.json'))

    def __repr__(self):
        return f'<ClientConfig: {self.api_url}>'
