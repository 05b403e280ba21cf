import os
import logging
import uvicorn

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

if os.environ.get("DEBUG", "0") == "1":
    logging.getLogger().setLevel(logging.DEBUG)

from api import create_app
from config import get_config

config = get_config()


def run() -> None:
    app = create_app(cfg=config)
    logger.info(f"Starting Cutpoint Studio on {config.host}:{config.port}")
    if not app.state.use_case.transcoder.is_available():
        logger.warning(f"{config.ffmpeg_binary} not found; audio extraction will fail")
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()
