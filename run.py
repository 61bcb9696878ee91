# Entry point for the chat server

import logging

from config import LOG_LEVEL

logging.basicConfig(
    level=getattr(logging, str(LOG_LEVEL).upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger('chatapp.server')

from chatapp import create_app  # noqa: E402
from chatapp.extensions import socketio  # noqa: E402

app = create_app()


def main():
    host = app.config['HOST']
    port = app.config['PORT']
    logger.info("Server running on port %s", port)
    socketio.run(app, host=host, port=port, allow_unsafe_werkzeug=True, debug=False)


if __name__ == '__main__':
    main()
